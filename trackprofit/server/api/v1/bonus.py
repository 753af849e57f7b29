"""
Monthly bonus endpoints.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query
from sqlmodel import select

from trackprofit.core.database.base import utc_now
from trackprofit.core.database.entities import MonthlyBonus
from trackprofit.core.models.io import MonthlyBonusRead, MonthlyBonusWrite

from ...services.deps import CSRFDep, CurrentUserDep, SessionDep

router = APIRouter(tags=["bonus"])


async def _find_bonus(session, user_id: str, year: int, month: int) -> Optional[MonthlyBonus]:
    stmt = (
        select(MonthlyBonus)
        .where(MonthlyBonus.user_id == user_id)
        .where(MonthlyBonus.year == year)
        .where(MonthlyBonus.month == month)
    )
    result = await session.execute(stmt)
    return result.scalars().first()


@router.get("", response_model=Optional[MonthlyBonusRead], summary="Get Monthly Bonus")
async def get_bonus(
    user_id: CurrentUserDep,
    session: SessionDep,
    year: int = Query(ge=2020, le=2100),
    month: int = Query(ge=1, le=12),
) -> Optional[MonthlyBonusRead]:
    bonus = await _find_bonus(session, user_id, year, month)
    return MonthlyBonusRead.model_validate(bonus) if bonus else None


@router.put(
    "",
    response_model=MonthlyBonusRead,
    dependencies=[CSRFDep],
    summary="Set Monthly Bonus",
    description="Create or replace the bonus (MAD) of a month.",
)
async def set_bonus(payload: MonthlyBonusWrite, user_id: CurrentUserDep, session: SessionDep) -> MonthlyBonusRead:
    bonus = await _find_bonus(session, user_id, payload.year, payload.month)
    if bonus is None:
        bonus = MonthlyBonus(user_id=user_id, **payload.model_dump())
    else:
        bonus.amount_dh = payload.amount_dh
        bonus.updated_at = utc_now()
    session.add(bonus)
    await session.commit()
    await session.refresh(bonus)
    return MonthlyBonusRead.model_validate(bonus)

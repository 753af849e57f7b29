"""
Prompt templates for the French narrative features.
"""

import json
from typing import Any, Dict, Iterable, List, Optional

INSIGHTS_SYSTEM_PROMPT = (
    "Tu es un analyste marketing spécialisé dans l'e-commerce COD (Cash on Delivery) en Afrique.\n"
    "Génère des insights stratégiques concis et actionnables basés sur les données fournies.\n"
    "Réponds en français, avec des recommandations spécifiques et chiffrées.\n"
    "Format : titre + bullets courts (≤ 140 caractères par bullet).\n"
    "Focus sur : produits à scaler, campagnes à optimiser, anomalies à corriger."
)

ANOMALY_SYSTEM_PROMPT = (
    "Tu es un expert marketing e-commerce. Réponds en français avec des actions précises et chiffrées."
)

CHAT_SYSTEM_PROMPT = (
    "Tu es un assistant IA spécialisé dans TrackProfit, une plateforme d'analyse marketing "
    "pour l'e-commerce COD en Afrique.\n\n"
    "Contexte utilisateur: {page}\n"
    "Filtres actifs: {filters}\n\n"
    "Réponds en français, sois concis et actionnable.\n"
    "Focus sur l'analyse des données marketing (ROI, CPL, CPD, taux de livraison).\n"
    "Propose des recommandations concrètes pour optimiser les performances."
)


def insights_user_prompt(
    month: int,
    year: int,
    metrics: Dict[str, float],
    products: Iterable[Any],
    countries: Iterable[Any] = (),
) -> str:
    """Monthly figures, top products and per-country results, as shown to the analyst persona."""
    product_lines = "\n".join(f"- {p.name}: {p.revenue:.1f} MAD ({p.quantity} ventes)" for p in products)
    country_lines = "\n".join(
        f"- {c.country_name}: {c.roi_percent:.1f}% ROI, {c.revenue_mad:.0f} MAD" for c in countries
    )
    return (
        f"Analyse ces données pour {month}/{year}:\n\n"
        "MÉTRIQUES GLOBALES:\n"
        f"- Dépenses: {metrics['total_spend']} MAD\n"
        f"- CA: {metrics['total_revenue']} MAD\n"
        f"- ROI: {metrics['roi']}%\n"
        f"- Taux livraison: {metrics['delivery_rate']}%\n"
        f"- CPL: {metrics['cpl']} MAD\n"
        f"- CPD: {metrics['cpd']} MAD\n\n"
        "TOP PRODUITS:\n"
        f"{product_lines or '- Aucune vente enregistrée'}\n\n"
        "PAYS:\n"
        f"{country_lines or '- Aucune donnée pays'}\n\n"
        "Génère:\n"
        "1. Top 3 produits à scaler\n"
        "2. 2 optimisations urgentes\n"
        "3. 1 alerte critique si applicable"
    )


def anomaly_user_prompt(anomalies: List[str], total_spend: float, total_revenue: float) -> str:
    return (
        f"Anomalies détectées hier: {', '.join(anomalies)}.\n"
        f"Dépenses: {total_spend:.0f} MAD, CA: {total_revenue:.0f} MAD.\n\n"
        "Donne 3 actions correctives concrètes (max 120 mots total):"
    )


def chat_system_prompt(page: Optional[str], filters: Optional[Dict[str, Any]]) -> str:
    return CHAT_SYSTEM_PROMPT.format(
        page=page or "Dashboard",
        filters=json.dumps(filters or {}, ensure_ascii=False, default=str),
    )

"""Pure KPI calculations over tracking rows."""

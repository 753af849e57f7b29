"""
Service layer of the TrackProfit server.

Services combine repositories, KPI calculations and the narrative model; the
API routers stay thin wrappers around them.
"""

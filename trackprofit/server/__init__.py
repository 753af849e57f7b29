"""
TrackProfit HTTP server: FastAPI application, routers, services and middleware.
"""

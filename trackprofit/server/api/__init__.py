"""HTTP API of the TrackProfit server."""

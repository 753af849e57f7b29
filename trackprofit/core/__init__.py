"""
Core building blocks shared by the server and background jobs: logging,
monitoring, domain errors, month helpers and the database layer.
"""

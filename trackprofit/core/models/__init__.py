"""Data models shared between the API and the service layer."""

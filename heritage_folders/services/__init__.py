"""Business logic services for the folder hierarchy."""

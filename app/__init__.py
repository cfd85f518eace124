"""Notification scheduling and dispatch engine for the counseling platform."""

"""Offline feedback feature: form state and the save endpoint client."""

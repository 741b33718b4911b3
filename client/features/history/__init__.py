"""Chat history feature: the local archive of past conversations."""

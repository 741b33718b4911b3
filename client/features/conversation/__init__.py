"""Conversation feature: message models, request client, state and controller."""

"""Outbound integrations: HTTP, speech synthesis, storage, email, social."""

"""Data model exports."""

from .credentials import AuthState, CredentialBundle

__all__ = ["AuthState", "CredentialBundle"]

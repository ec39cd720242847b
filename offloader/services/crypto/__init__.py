"""Credential encryption."""
from .credential_store import CredentialStore, CredentialPair

__all__ = ['CredentialStore', 'CredentialPair']

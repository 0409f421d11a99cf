"""Session lifecycle and request authentication"""
from adminauth.services.authenticator import AuthOutcome, AuthResult, RequestAuthenticator, extract_token
from adminauth.services.session_store import SessionStore

__all__ = ["AuthOutcome", "AuthResult", "RequestAuthenticator", "SessionStore", "extract_token"]

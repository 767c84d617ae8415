"""
Identification de l'appelant pour les routes commandes.
- Token Bearer obligatoire (401 sinon).
- Le login est hors périmètre: l'identifiant propriétaire est un hash du token, sans vérification.
"""
import hashlib
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request


def bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[7:].strip() or None
    return None


def owner_key(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()[:16]


def get_current_user(request: Request) -> Dict[str, Any]:
    token = bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authorized, no token")
    return {"id": owner_key(token), "token": token}


def require_user(user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    return user

from typing import Optional
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer

# The token is issued by the upstream backend; it is only forwarded here.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


def get_bearer_token(token: Optional[str] = Depends(oauth2_scheme)) -> Optional[str]:
    # Missing tokens are not rejected here: the API client checks for a
    # credential before each upstream call and raises AuthenticationRequired.
    return token or None

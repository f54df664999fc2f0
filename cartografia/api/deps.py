# cartografia/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from cartografia.core.config import settings
from cartografia.core.database import get_db
from cartografia.models.user import User
from cartografia.repositories.base import TerritoryRepository
from cartografia.repositories.postgis_repository import PostgisTerritoryRepository
from cartografia.repositories.sheet_repository import SheetTerritoryRepository
from cartografia.schemas.auth import TokenData
from cartografia.services.sheets.client import AppsScriptClient

# Define que o token vem do header "Authorization: Bearer <token>"
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token")

async def get_current_user(token: str = Depends(oauth2_scheme), db: AsyncSession = Depends(get_db)) -> User:
    """
    Decodifica o token, extrai o usuário e busca no banco.
    Se algo der errado, lança 401 Unauthorized.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        username: str = payload.get("sub")
        if username is None:
            raise credentials_exception
        token_data = TokenData(username=username)
    except JWTError:
        raise credentials_exception

    result = await db.execute(select(User).where(User.username == token_data.username))
    user = result.scalars().first()

    if user is None or not user.is_active:
        raise credentials_exception
    return user

async def get_repository(db: AsyncSession = Depends(get_db)) -> TerritoryRepository:
    """Escolhe o backend de armazenamento pela configuração."""
    if settings.STORAGE_BACKEND == "sheets":
        client = AppsScriptClient(settings.APPS_SCRIPT_URL, timeout=settings.APPS_SCRIPT_TIMEOUT)
        return SheetTerritoryRepository(client)
    return PostgisTerritoryRepository(db)

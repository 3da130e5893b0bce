# services/school_admin/controllers/auth_service.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.auth import create_access_token
from shared.db import get_db
from services.school_admin.identity import IdentityProvider
from services.school_admin.schemas.users import LoginRequest, LoginResponse

router = APIRouter(prefix="/auth", tags=["Auth"])


# --- UNIVERSAL LOGIN ---
@router.post("/login", response_model=LoginResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    account = await IdentityProvider(db).authenticate(payload.username, payload.password)
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    access_token = create_access_token({"sub": account.id, "role": account.role.value})

    return LoginResponse(
        name=f"{account.first_name} {account.last_name}",
        role=account.role.value,
        access_token=access_token,
    )

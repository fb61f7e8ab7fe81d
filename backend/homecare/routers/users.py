from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from homecare.database import get_db
from homecare.auth import CLIENT, Identity, create_token, require_client
from homecare.schemas.account import LoginRequest, TokenResponse, UserRegister, UserRegistered, UserResponse
from homecare.services.identity_service import identity_service

router = APIRouter()


@router.post("/register", response_model=UserRegistered, status_code=201)
async def register(data: UserRegister, db: AsyncSession = Depends(get_db)):
    user = await identity_service.register_client(db, data)
    return UserRegistered(
        user=UserResponse.model_validate(user),
        token=create_token(user.id, CLIENT),
        role=CLIENT,
    )


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    identity = await identity_service.authenticate(db, CLIENT, body.user_name, body.password)
    return TokenResponse(access_token=create_token(identity.id, CLIENT), role=CLIENT)


@router.get("/panel")
async def panel(current_user: Identity = Depends(require_client)):
    return {
        "message": "Welcome to your home panel",
        "options": ["Find nurses", "My patients"],
    }

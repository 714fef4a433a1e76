import uuid
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.database import get_session
from api.crud.user import UserService
from api.crud.user.schema import DeleteResult, UserCreate, UserRead, UserUpdate

router = APIRouter()

def get_user_service(session: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(session)

@router.get("", response_model=list[UserRead], summary="Список пользователей")
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()

@router.get("/{user_id}", response_model=UserRead, summary="Получение пользователя")
async def get_user(user_id: uuid.UUID, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)

@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED, summary="Создание пользователя")
async def create_user(dto: UserCreate, service: UserService = Depends(get_user_service)):
    return await service.create_user(dto)

@router.put("/{user_id}", response_model=UserRead, summary="Изменение пользователя и его ставки")
async def update_user(user_id: uuid.UUID, dto: UserUpdate, service: UserService = Depends(get_user_service)):
    return await service.update_user(user_id, dto)

@router.delete("/{user_id}", response_model=DeleteResult, summary="Удаление пользователя")
async def delete_user(user_id: uuid.UUID, service: UserService = Depends(get_user_service)):
    return await service.delete_user(user_id)

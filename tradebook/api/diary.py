from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradebook import storage
from tradebook.api.deps import get_current_user
from tradebook.db.database import get_db
from tradebook.models.user import User
from tradebook.schemas.journal import DiaryOut, DiaryUpsert

router = APIRouter(
    prefix="/api/diary",
    tags=["diary"],
)


@router.get("", response_model=List[DiaryOut])
async def list_diary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return await storage.list_diary(db, user.id)


@router.post("", response_model=DiaryOut)
async def upsert_diary(
    payload: DiaryUpsert,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    # One entry per user per day: a second post for the same date
    # overwrites content and mood.
    return await storage.upsert_diary(
        db,
        user_id=user.id,
        entry_date=payload.date,
        content=payload.content,
        mood=payload.mood,
    )


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_diary(
    entry_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not await storage.delete_diary(db, entry_id, user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Diary entry not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)

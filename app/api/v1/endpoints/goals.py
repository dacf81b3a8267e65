"""
Goal API Endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db, get_current_user_id
from app.core.money import round_money
from app.schemas.goal import (
    GoalCreate,
    GoalCreateResponse,
    GoalsResponse,
    GoalUpdate,
    GoalUpdateResponse
)
from app.services.goal_evaluator import GoalEvaluator

router = APIRouter()

@router.get("", response_model=GoalsResponse)
async def get_goals(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Saving goal and this month's expense-limit goals with their progress
    """
    goals = await GoalEvaluator(db).get_goals(user_id)
    return {
        "success": True,
        "message": "Goals retrieved successfully",
        "data": goals
    }

@router.post("", response_model=GoalCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal: GoalCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Create a saving or expense-limit goal"""
    created = await GoalEvaluator(db).create_goal(user_id, goal)
    return {"message": "Goal created successfully", "goal_id": created.id}

@router.put("/{goal_id}", response_model=GoalUpdateResponse)
async def update_goal(
    goal_id: int,
    update_data: GoalUpdate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Change a goal's target amount"""
    updated = await GoalEvaluator(db).update_goal(goal_id, user_id, update_data)
    return {
        "message": "Goal updated successfully",
        "updated_goal": {
            "goal_id": updated.id,
            "target_amount": round_money(updated.target_amount)
        }
    }

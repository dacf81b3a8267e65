"""
Goal Evaluator
Computes goal progress from the ledger at read time and manages goal records.
"""

import logging
from datetime import date
from typing import Dict, Optional

from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.datetime_utils import current_month_bounds, format_date, parse_date
from app.core.exceptions import Forbidden, NotFound, ValidationFailed, guard_service
from app.core.money import round_money, to_decimal
from app.models.category import Category
from app.models.goal import Goal, GoalType
from app.models.transaction import TransactionType
from app.schemas.goal import GoalCreate, GoalUpdate
from app.services.aggregation_engine import AggregationEngine, UNKNOWN_CATEGORY

logger = logging.getLogger(__name__)


class GoalEvaluator:
    """
    Saving goals track this month's net savings; expense-limit goals track
    this month's spending in their category.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.aggregation = AggregationEngine(db)

    async def _saving_goal(self, user_id: int) -> Optional[Goal]:
        # Only the first saving goal is reported
        stmt = select(Goal).where(
            and_(
                Goal.user_id == user_id,
                Goal.goal_type == GoalType.SAVING
            )
        ).order_by(Goal.id.asc()).limit(1)
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def _expense_goals_overlapping(self, user_id: int, start_of_month: date, end_of_month: date):
        stmt = select(Goal).where(
            and_(
                Goal.user_id == user_id,
                Goal.goal_type == GoalType.EXPENSE_LIMIT,
                Goal.start_date <= end_of_month,
                Goal.end_date >= start_of_month
            )
        ).order_by(Goal.id.asc())
        result = await self.db.execute(stmt)
        return result.scalars().all()

    @guard_service("A system error occurred while loading goals. Please try again later.")
    async def get_goals(self, user_id: int, reference: Optional[date] = None) -> Dict:
        """
        The saving goal (if any) and every expense-limit goal active this
        month, each with its progress computed from this month's ledger.
        """
        start_of_month, end_of_month = current_month_bounds(reference)
        account_ids = await self.aggregation.get_account_ids(user_id)

        saving_goal = await self._saving_goal(user_id)
        expense_goals = await self._expense_goals_overlapping(user_id, start_of_month, end_of_month)

        saving_goal_response = None
        if saving_goal:
            achieved = await self.aggregation.net_savings(account_ids, start_of_month, end_of_month)
            saving_goal_response = {
                'goal_id': saving_goal.id,
                'goal_type': saving_goal.goal_type,
                'target_amount': round_money(saving_goal.target_amount),
                'target_achieved': round_money(achieved),
                'start_date': format_date(saving_goal.start_date),
                'end_date': format_date(saving_goal.end_date)
            }

        names = await self.aggregation.lookup_category_names(g.category_id for g in expense_goals)

        expense_goals_response = []
        for goal in expense_goals:
            current_expense = to_decimal(0)
            if goal.category_id:
                current_expense = await self.aggregation.sum_transactions(
                    account_ids,
                    TransactionType.EXPENSE,
                    start_of_month,
                    end_of_month,
                    category_id=goal.category_id
                )
            expense_goals_response.append({
                'goal_id': goal.id,
                'category': names.get(goal.category_id, UNKNOWN_CATEGORY),
                'target_amount': round_money(goal.target_amount),
                'current_expense': round_money(current_expense)
            })

        return {
            'savingGoal': saving_goal_response,
            'expenseGoals': expense_goals_response
        }

    @guard_service("Unable to create the goal right now. Please try again later.")
    async def create_goal(self, user_id: int, payload: GoalCreate) -> Goal:
        if payload.target_amount is None or to_decimal(payload.target_amount) <= 0:
            raise ValidationFailed("target_amount must be greater than 0.")

        start_date = parse_date(payload.start_date)
        end_date = parse_date(payload.end_date)
        if start_date is None or end_date is None:
            raise ValidationFailed("start_date and end_date must be valid dates.")
        if end_date <= start_date:
            raise ValidationFailed("end_date must be after start_date.")

        category_id = None
        if payload.goal_type is GoalType.EXPENSE_LIMIT:
            if not payload.category_id:
                raise ValidationFailed("category_id is required when goal_type is Expense_Limit.")
            category = await self.db.get(Category, payload.category_id)
            if category is None:
                raise ValidationFailed("category_id is invalid. The category does not exist.")
            category_id = category.id
        elif payload.goal_type is not GoalType.SAVING:
            raise ValidationFailed("goal_type must be Saving or Expense_Limit.")

        goal = Goal(
            user_id=user_id,
            goal_type=payload.goal_type,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
            target_amount=to_decimal(payload.target_amount)
        )
        self.db.add(goal)
        await self.db.commit()
        await self.db.refresh(goal)

        logger.info("Created %s goal %s for user %s", goal.goal_type.value, goal.id, user_id)
        return goal

    @guard_service("Unable to save changes right now. Please try again later.")
    async def update_goal(self, goal_id: int, user_id: int, payload: GoalUpdate) -> Goal:
        """Change the target amount of a goal owned by the caller"""
        goal = await self.db.get(Goal, goal_id)
        if goal is None:
            raise NotFound("Goal does not exist.")
        if goal.user_id != user_id:
            raise Forbidden("You do not have permission to edit this goal.")

        if payload.target_amount is None or to_decimal(payload.target_amount) <= 0:
            raise ValidationFailed("target_amount must be a positive number")

        goal.target_amount = to_decimal(payload.target_amount)
        await self.db.commit()
        await self.db.refresh(goal)

        logger.info("Updated goal %s target to %s", goal.id, goal.target_amount)
        return goal

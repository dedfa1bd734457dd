"""Membership plan service - CRUD with a Redis-cached public listing"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import PLANS_KEY, cache
from ...models import Payment, SubscriptionPlan, User
from .schemas import PlanCreate, PlanResponse, PlanUpdate

logger = logging.getLogger(__name__)

PLANS_TTL = 3600


class PlanService:
    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> list[dict]:
        return cache.get_or_load(PLANS_KEY, self._active_plans, ttl=PLANS_TTL)

    def _active_plans(self) -> list[dict]:
        plans = (
            self.db.query(SubscriptionPlan)
            .filter(SubscriptionPlan.is_active.is_(True))
            .order_by(SubscriptionPlan.price)
            .all()
        )
        return [PlanResponse.model_validate(p).model_dump(mode="json") for p in plans]

    def get_plan(self, plan_id: int) -> SubscriptionPlan:
        plan = self.db.get(SubscriptionPlan, plan_id)
        if not plan:
            raise HTTPException(status_code=404, detail="Subscription not found")
        return plan

    def create_plan(self, data: PlanCreate) -> SubscriptionPlan:
        plan = SubscriptionPlan(**data.model_dump())
        self.db.add(plan)
        self.db.commit()
        self.db.refresh(plan)
        cache.invalidate(PLANS_KEY)
        logger.info(f"✅ Plan created: {plan.name} (₹{plan.price})")
        return plan

    def update_plan(self, plan_id: int, data: PlanUpdate) -> SubscriptionPlan:
        plan = self.get_plan(plan_id)
        for key, value in data.model_dump(exclude_unset=True).items():
            setattr(plan, key, value)
        self.db.commit()
        self.db.refresh(plan)
        cache.invalidate(PLANS_KEY)
        return plan

    def delete_plan(self, plan_id: int) -> None:
        plan = self.get_plan(plan_id)
        # Keep payment history and member subscriptions, drop only the reference
        self.db.query(User).filter(User.subscription_plan_id == plan_id).update(
            {User.subscription_plan_id: None}, synchronize_session=False
        )
        self.db.query(Payment).filter(Payment.plan_id == plan_id).update(
            {Payment.plan_id: None}, synchronize_session=False
        )
        self.db.delete(plan)
        self.db.commit()
        cache.invalidate(PLANS_KEY)
        logger.info(f"🗑️ Plan {plan_id} removed")

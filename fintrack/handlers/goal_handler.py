# handlers/goal_handler.py
import datetime
from typing import List, Optional

from fastapi import Depends
from pydantic import BaseModel, ConfigDict, Field

from fintrack.engine.aggregation import goal_progress
from fintrack.store import RecordStore
from fintrack.web_app import app, get_current_user_id, get_store


class GoalIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    target_amount: float
    current_amount: float = 0
    deadline: Optional[datetime.date] = None


class GoalAmountIn(BaseModel):
    current_amount: float


class GoalProgressOut(BaseModel):
    percent: float
    display_percent: float
    remaining: float


class GoalOut(BaseModel):
    id: int
    name: str
    target_amount: float
    current_amount: float
    deadline: Optional[datetime.date] = None
    progress: GoalProgressOut


@app.get("/api/savings-goals", response_model=List[GoalOut])
def list_goals(owner_id: int = Depends(get_current_user_id), store: RecordStore = Depends(get_store)):
    return [
        GoalOut(
            id=g.id,
            name=g.name,
            target_amount=float(g.target_amount),
            current_amount=float(g.current_amount),
            deadline=g.deadline,
            progress=goal_progress(g).to_dict(),
        )
        for g in store.list_goals(owner_id)
    ]


@app.post("/api/savings-goals")
def create_goal(body: GoalIn, owner_id: int = Depends(get_current_user_id), store: RecordStore = Depends(get_store)):
    goal = store.create_goal(owner_id, body.name, body.target_amount, body.current_amount, body.deadline)
    return {"success": True, "id": goal.id}


@app.put("/api/savings-goals/{goal_id}")
def update_goal(goal_id: int, body: GoalAmountIn, owner_id: int = Depends(get_current_user_id),
                store: RecordStore = Depends(get_store)):
    store.update_goal_amount(owner_id, goal_id, body.current_amount)
    return {"success": True}


@app.delete("/api/savings-goals/{goal_id}")
def delete_goal(goal_id: int, owner_id: int = Depends(get_current_user_id), store: RecordStore = Depends(get_store)):
    store.delete_goal(owner_id, goal_id)
    return {"success": True}

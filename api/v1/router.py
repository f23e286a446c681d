# api/v1/router.py
from fastapi import APIRouter

from . import chat, meal_plan

api_router = APIRouter()

api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
api_router.include_router(meal_plan.router, prefix="/meal-plan", tags=["Meal plan"])

import logging
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import Field, StrictInt

import achievements
import community
import config
import farm
import learning
import marketplace
import users
from database import MemoryDatabase, db
from errors import AgriVentureError, NotFoundError
from schemas import (
    Achievement,
    CamelModel,
    CommunityPost,
    CommunityPostWithUser,
    CommunityStats,
    Equipment,
    FarmPlotView,
    LearningModule,
    PostType,
    TopContributor,
    User,
    UserAchievementWithDetails,
    UserProgress,
    UserProgressWithModule,
    UserPurchase,
    WeatherData,
)

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AgriVenture API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ----------------------
# Dependencies
# ----------------------

def get_db() -> MemoryDatabase:
    return db


def current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    return x_user_id or config.DEFAULT_USER_ID


# ----------------------
# Errors
# ----------------------

@app.exception_handler(AgriVentureError)
async def handle_domain_error(request: Request, exc: AgriVentureError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
    return JSONResponse(status_code=400, content={"message": "Invalid input data"})


# ----------------------
# Models (requests)
# ----------------------

class SignupRequest(CamelModel):
    username: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    location: Optional[str] = None

class PlantRequest(CamelModel):
    plot_index: StrictInt
    crop_type: str

class HarvestRequest(CamelModel):
    plot_index: StrictInt

class ModuleRequest(CamelModel):
    module_id: str

class PurchaseRequest(CamelModel):
    equipment_id: str

class PostRequest(CamelModel):
    title: str
    content: str
    type: PostType = "success_story"
    metrics: Optional[Dict[str, Any]] = None


# ----------------------
# Health
# ----------------------

@app.get("/")
def read_root():
    return {"message": "AgriVenture backend running"}

@app.get("/test")
def test_database(store: MemoryDatabase = Depends(get_db)):
    return {
        "backend": "✅ Running",
        "database": "✅ In-memory",
        "collections": store.collection_counts(),
    }


# ----------------------
# Users
# ----------------------

@app.post("/auth/signup", response_model=User)
def signup(payload: SignupRequest, store: MemoryDatabase = Depends(get_db)):
    return users.create_user(
        store,
        username=payload.username,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        location=payload.location,
    )

@app.get("/user/current", response_model=User)
def get_current_user(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    return users.get_user(store, user_id)


# ----------------------
# Farm
# ----------------------

@app.get("/farm/plots", response_model=List[FarmPlotView])
def get_farm_plots(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    return farm.get_plots(store, user_id)

@app.post("/farm/plant")
def plant_crop(payload: PlantRequest, store: MemoryDatabase = Depends(get_db),
               user_id: str = Depends(current_user_id)):
    plot = farm.plant(store, user_id, payload.plot_index, payload.crop_type)
    return {
        "message": "Crop planted successfully",
        "plot": plot.model_dump(mode="json", by_alias=True),
    }

@app.post("/farm/harvest")
def harvest_crop(payload: HarvestRequest, store: MemoryDatabase = Depends(get_db),
                 user_id: str = Depends(current_user_id)):
    credits = farm.harvest(store, user_id, payload.plot_index)
    return {"message": "Crop harvested successfully", "creditsEarned": credits}

@app.post("/farm/water")
def water_crops(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    watered = farm.water(store, user_id)
    return {"message": "All crops watered successfully", "plotsWatered": watered}


# ----------------------
# Learning
# ----------------------

@app.get("/learning/modules", response_model=List[LearningModule])
def get_learning_modules(store: MemoryDatabase = Depends(get_db)):
    return learning.list_modules(store)

@app.get("/learning/progress", response_model=List[UserProgressWithModule])
def get_learning_progress(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    return learning.list_progress_with_modules(store, user_id)

@app.get("/learning/user-progress", response_model=List[UserProgress])
def get_user_progress(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    return learning.list_progress(store, user_id)

@app.post("/learning/start")
def start_module(payload: ModuleRequest, store: MemoryDatabase = Depends(get_db),
                 user_id: str = Depends(current_user_id)):
    learning.start_module(store, user_id, payload.module_id)
    return {"message": "Module started successfully"}

@app.post("/learning/continue")
def continue_module(payload: ModuleRequest, store: MemoryDatabase = Depends(get_db),
                    user_id: str = Depends(current_user_id)):
    progress, earned = learning.continue_module(store, user_id, payload.module_id)
    return {
        "message": "Lesson completed successfully",
        "creditsEarned": earned,
        "moduleCompleted": progress.completed,
    }


# ----------------------
# Marketplace
# ----------------------

@app.get("/marketplace/equipment", response_model=List[Equipment])
def get_equipment(store: MemoryDatabase = Depends(get_db)):
    return marketplace.list_equipment(store)

@app.post("/marketplace/purchase")
def purchase_equipment(payload: PurchaseRequest, store: MemoryDatabase = Depends(get_db),
                       user_id: str = Depends(current_user_id)):
    record = marketplace.purchase(store, user_id, payload.equipment_id)
    return {
        "message": "Equipment purchased successfully",
        "creditsSpent": record.credits_used,
        "remainingCredits": users.get_user(store, user_id).sustaina_credits,
    }

@app.get("/marketplace/purchases", response_model=List[UserPurchase])
def get_purchases(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    return marketplace.list_purchases(store, user_id)


# ----------------------
# Achievements
# ----------------------

@app.get("/achievements", response_model=List[Achievement])
def get_achievements(store: MemoryDatabase = Depends(get_db)):
    return achievements.list_achievements(store)

@app.get("/achievements/recent", response_model=List[UserAchievementWithDetails])
def get_recent_achievements(store: MemoryDatabase = Depends(get_db), user_id: str = Depends(current_user_id)):
    return achievements.recent_achievements(store, user_id)


# ----------------------
# Community
# ----------------------

@app.get("/community/posts", response_model=List[CommunityPostWithUser])
def get_community_posts(store: MemoryDatabase = Depends(get_db)):
    return community.list_posts(store)

@app.post("/community/posts", response_model=CommunityPost)
def create_community_post(payload: PostRequest, store: MemoryDatabase = Depends(get_db),
                          user_id: str = Depends(current_user_id)):
    return community.create_post(
        store, user_id, payload.title, payload.content,
        post_type=payload.type, metrics=payload.metrics,
    )

@app.get("/community/top-contributors", response_model=List[TopContributor])
def get_top_contributors(store: MemoryDatabase = Depends(get_db)):
    return community.top_contributors(store)

@app.get("/community/stats", response_model=CommunityStats)
def get_community_stats(store: MemoryDatabase = Depends(get_db)):
    return community.community_stats(store)


# ----------------------
# Weather
# ----------------------

@app.get("/weather/current", response_model=WeatherData)
def get_current_weather(store: MemoryDatabase = Depends(get_db)):
    if store.weather is None:
        raise NotFoundError("Weather data not available")
    return store.weather


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)

"""Fixture data loaded into a fresh store at startup."""
from datetime import timedelta
from decimal import Decimal
from typing import Optional

import config
from schemas import (
    Achievement,
    CommunityPost,
    CreditTransaction,
    Equipment,
    FarmPlot,
    LearningModule,
    Planting,
    User,
    UserAchievement,
    UserProgress,
    WeatherData,
)

# Fixture key of the seeded farmer. Rows owned by it are stored under the
# configured default user id.
DEFAULT_USER_ID = config.DEFAULT_USER_ID

# ----------------------
# Users
# ----------------------

SEED_USERS = [
    {
        "id": DEFAULT_USER_ID,
        "username": "farmer123",
        "email": "farmer@example.com",
        "first_name": "Ravi",
        "last_name": "Patel",
        "sustaina_credits": 2450,
        "farm_level": 5,
        "learning_streak": 7,
        "location": "Haryana, India",
    },
    {
        "id": "user-anita",
        "username": "anita_grows",
        "email": "anita@example.com",
        "first_name": "Anita",
        "last_name": "Sharma",
        "sustaina_credits": 1830,
        "farm_level": 4,
        "learning_streak": 3,
        "location": "Punjab, India",
    },
    {
        "id": "user-joseph",
        "username": "joseph_k",
        "email": "joseph@example.com",
        "first_name": "Joseph",
        "last_name": "Kurian",
        "sustaina_credits": 960,
        "farm_level": 2,
        "learning_streak": 1,
        "location": "Kerala, India",
    },
]

# (plot index, crop, days since planting, days until harvest, water level)
# Zero days until harvest seeds a crop that is already ready.
SEED_PLANTINGS = [
    (0, "tomatoes", 9, 5, 85),
    (1, "spinach", 7, 0, 90),
    (2, "lettuce", 10, 0, 88),
    (3, "carrots", 3, 18, 95),
    (4, "peppers", 10, 8, 80),
]

# ----------------------
# Catalogs
# ----------------------

SEED_MODULES = [
    {
        "id": "module-1",
        "title": "Smart Crop Selection",
        "description": "Choose the right crops for maximum profitability",
        "category": "crops",
        "difficulty": "intermediate",
        "lessons_count": 8,
        "credits_reward": 150,
        "prerequisite_modules": [],
        "estimated_duration": 240,
        "thumbnail_color": "from-green-400 to-green-600",
    },
    {
        "id": "module-2",
        "title": "Soil Health & Management",
        "description": "Optimize soil for sustainable farming",
        "category": "soil",
        "difficulty": "beginner",
        "lessons_count": 6,
        "credits_reward": 200,
        "prerequisite_modules": [],
        "estimated_duration": 180,
        "thumbnail_color": "from-amber-400 to-orange-600",
    },
    {
        "id": "module-3",
        "title": "Vertical Farming Systems",
        "description": "Master space-efficient farming techniques",
        "category": "vertical",
        "difficulty": "intermediate",
        "lessons_count": 12,
        "credits_reward": 300,
        "prerequisite_modules": ["module-2"],
        "estimated_duration": 360,
        "thumbnail_color": "from-blue-400 to-indigo-600",
    },
    {
        "id": "module-4",
        "title": "Agricultural Market Analysis",
        "description": "Understand pricing and demand trends",
        "category": "market",
        "difficulty": "advanced",
        "lessons_count": 10,
        "credits_reward": 250,
        "prerequisite_modules": ["module-3"],
        "estimated_duration": 300,
        "thumbnail_color": "from-purple-400 to-pink-600",
    },
    {
        "id": "module-5",
        "title": "Modern Farm Equipment",
        "description": "Master agricultural technology and tools",
        "category": "equipment",
        "difficulty": "beginner",
        "lessons_count": 9,
        "credits_reward": 180,
        "prerequisite_modules": [],
        "estimated_duration": 270,
        "thumbnail_color": "from-teal-400 to-cyan-600",
    },
    {
        "id": "module-6",
        "title": "Sustainable Farming Practices",
        "description": "Eco-friendly and profitable farming methods",
        "category": "sustainable",
        "difficulty": "intermediate",
        "lessons_count": 11,
        "credits_reward": 320,
        "prerequisite_modules": ["module-2"],
        "estimated_duration": 330,
        "thumbnail_color": "from-emerald-400 to-green-700",
    },
]

# (id, module, completed lessons, credits earned, started days ago, completed days ago)
SEED_PROGRESS = [
    ("progress-1", "module-1", 6, 108, 5, None),
    ("progress-2", "module-2", 6, 198, 14, 7),
    ("progress-3", "module-3", 5, 125, 3, None),
]

SEED_EQUIPMENT = [
    {
        "id": "equipment-1",
        "name": "Solar Water Pump System",
        "description": "1HP solar-powered irrigation pump with smart controller and weather monitoring.",
        "category": "irrigation",
        "price": Decimal("45000.00"),
        "original_price": Decimal("60000.00"),
        "credits_required": 1500,
        "discount_percentage": 25,
        "in_stock": True,
        "thumbnail_color": "from-yellow-400 to-orange-500",
        "specifications": {"power": "1HP", "efficiency": "85%", "warranty": "5 years"},
    },
    {
        "id": "equipment-2",
        "name": "Complete Vertical Farm Setup",
        "description": "6-tier hydroponic system with LED grow lights, nutrient solution, and automation.",
        "category": "tools",
        "price": Decimal("85000.00"),
        "credits_required": 2800,
        "in_stock": True,
        "thumbnail_color": "from-green-400 to-emerald-600",
        "specifications": {"tiers": 6, "capacity": "200 plants", "lighting": "Full spectrum LED"},
    },
    {
        "id": "equipment-3",
        "name": "Smart Irrigation Controller",
        "description": "IoT-enabled drip irrigation system with soil moisture sensors and mobile app control.",
        "category": "irrigation",
        "price": Decimal("25500.00"),
        "original_price": Decimal("30000.00"),
        "credits_required": 900,
        "discount_percentage": 15,
        "in_stock": True,
        "thumbnail_color": "from-blue-400 to-cyan-600",
        "specifications": {"sensors": "Soil moisture, pH", "connectivity": "WiFi, Bluetooth"},
    },
    {
        "id": "equipment-4",
        "name": "Professional Soil Testing Kit",
        "description": "Digital pH meter, NPK sensor, and moisture tester with mobile app connectivity.",
        "category": "sensors",
        "price": Decimal("8500.00"),
        "credits_required": 300,
        "in_stock": True,
        "thumbnail_color": "from-purple-400 to-indigo-600",
        "specifications": {"tests": "pH, NPK, Moisture", "accuracy": "±0.1 pH units"},
    },
    {
        "id": "equipment-5",
        "name": "Premium Seed Variety Pack",
        "description": "High-yield, disease-resistant seeds for lettuce, spinach, tomato, and herbs.",
        "category": "seeds",
        "price": Decimal("1200.00"),
        "credits_required": 50,
        "in_stock": True,
        "thumbnail_color": "from-pink-400 to-rose-600",
        "specifications": {"varieties": "4 types", "germination": "95%+", "organic": True},
    },
    {
        "id": "equipment-6",
        "name": "Hydroponic Nutrient Solutions",
        "description": "Complete nutrient mix for hydroponic systems - vegetative and flowering formulas.",
        "category": "tools",
        "price": Decimal("3500.00"),
        "credits_required": 120,
        "in_stock": False,
        "thumbnail_color": "from-amber-400 to-yellow-600",
        "specifications": {"formulas": "Vegetative & Flowering", "yield": "500L solution"},
    },
]

SEED_ACHIEVEMENTS = [
    {
        "id": "achievement-1",
        "title": "Green Thumb",
        "description": "Successfully harvested 10 crops",
        "icon_type": "star",
        "credits_reward": 100,
        "category": "farming",
        "color": "primary",
    },
    {
        "id": "achievement-2",
        "title": "Knowledge Seeker",
        "description": "Completed 5 learning modules",
        "icon_type": "check",
        "credits_reward": 150,
        "category": "learning",
        "color": "secondary",
    },
    {
        "id": "achievement-3",
        "title": "Efficient Farmer",
        "description": "Reduced water usage by 50%",
        "icon_type": "settings",
        "credits_reward": 75,
        "category": "efficiency",
        "color": "accent",
    },
    {
        "id": "achievement-4",
        "title": "Community Voice",
        "description": "Shared your first success story",
        "icon_type": "heart",
        "credits_reward": 50,
        "category": "community",
        "color": "primary",
    },
]

# (achievement, earned days ago)
SEED_AWARDS = [
    ("achievement-1", 2),
    ("achievement-3", 1),
]

SEED_POSTS = [
    {
        "id": "post-1",
        "title": "Increased income by 300% with vertical farming",
        "content": (
            "After completing the vertical farming course and redeeming credits for a "
            "hydroponic setup, my monthly income jumped from ₹15,000 to ₹45,000!"
        ),
        "metrics": {"income_before": 15000, "income_after": 45000},
        "likes_count": 45,
        "comments_count": 12,
        "days_ago": 2,
    },
    {
        "id": "post-2",
        "title": "Reduced water usage by 80% while doubling crop yield",
        "content": (
            "The smart irrigation course taught me how to optimize water usage. With the "
            "drip system I got with my credits, my water bill dropped from ₹8,000 to ₹1,500."
        ),
        "metrics": {"water_before": 8000, "water_after": 1500, "yield_increase": 200},
        "likes_count": 67,
        "comments_count": 18,
        "days_ago": 4,
    },
]

# (user, amount, reason, days ago) for the weekly contributor ranking
SEED_LEDGER = [
    (DEFAULT_USER_ID, 18, "lesson:module-1", 1),
    (DEFAULT_USER_ID, 25, "lesson:module-3", 2),
    (DEFAULT_USER_ID, 40, "harvest:carrots", 3),
    ("user-anita", 60, "harvest:peppers", 1),
    ("user-anita", 50, "harvest:tomatoes", 5),
    ("user-joseph", 30, "harvest:spinach", 6),
]


def _owner(user_id: str, farmer_id: str) -> str:
    return farmer_id if user_id == DEFAULT_USER_ID else user_id


def seed_users(db, now, farmer_id: str) -> None:
    for data in SEED_USERS:
        data = dict(data, id=_owner(data["id"], farmer_id))
        user = User(created_at=now - timedelta(days=30), **data)
        db.users[user.id] = user


def seed_farm(db, now, farmer_id: str) -> None:
    for plot_index, crop, planted_ago, harvest_in, water in SEED_PLANTINGS:
        planting = Planting(
            crop_type=crop,
            planted_at=now - timedelta(days=planted_ago),
            estimated_harvest_date=now + timedelta(days=harvest_in),
            water_level=water,
        )
        db.farm_plots[(farmer_id, plot_index)] = FarmPlot(
            id=f"plot-{plot_index}",
            user_id=farmer_id,
            plot_index=plot_index,
            planting=planting,
        )


def seed_learning(db, now, farmer_id: str) -> None:
    for data in SEED_MODULES:
        module = LearningModule(**data)
        db.learning_modules[module.id] = module

    for progress_id, module_id, done, earned, started_ago, completed_ago in SEED_PROGRESS:
        module = db.learning_modules[module_id]
        db.user_progress[(farmer_id, module_id)] = UserProgress(
            id=progress_id,
            user_id=farmer_id,
            module_id=module_id,
            current_lesson=done + 1,
            completed_lessons=done,
            progress=round(100 * done / module.lessons_count),
            completed=done == module.lessons_count,
            credits_earned=earned,
            started_at=now - timedelta(days=started_ago),
            completed_at=now - timedelta(days=completed_ago) if completed_ago is not None else None,
        )


def seed_marketplace(db) -> None:
    for data in SEED_EQUIPMENT:
        item = Equipment(**data)
        db.equipment[item.id] = item


def seed_achievements(db, now, farmer_id: str) -> None:
    for data in SEED_ACHIEVEMENTS:
        achievement = Achievement(**data)
        db.achievements[achievement.id] = achievement

    for achievement_id, days_ago in SEED_AWARDS:
        db.create_document("user_achievement", UserAchievement(
            user_id=farmer_id,
            achievement_id=achievement_id,
            earned_at=now - timedelta(days=days_ago),
        ))


def seed_community(db, now, farmer_id: str) -> None:
    for data in SEED_POSTS:
        data = dict(data)
        days_ago = data.pop("days_ago")
        db.create_document("community_post", CommunityPost(
            user_id=farmer_id,
            created_at=now - timedelta(days=days_ago),
            **data,
        ))

    for user_id, amount, reason, days_ago in SEED_LEDGER:
        db.create_document("credit_transaction", CreditTransaction(
            user_id=_owner(user_id, farmer_id),
            amount=amount,
            reason=reason,
            created_at=now - timedelta(days=days_ago),
        ))


def seed_weather(db, now) -> None:
    db.weather = WeatherData(
        id="weather-1",
        location="Haryana, India",
        temperature=28,
        humidity=72,
        wind_speed=15,
        uv_index=6,
        condition="Partly Cloudy",
        forecast={
            "tomorrow": {"temperature": 26, "condition": "Light Rain"},
            "dayAfter": {"temperature": 30, "condition": "Sunny"},
        },
        updated_at=now,
    )


def is_seeded(db) -> bool:
    return bool(db.users)


def seed_all(db, farmer_id: Optional[str] = None) -> None:
    """Load every fixture table. Does nothing on an already seeded store.

    The seeded farmer is stored under ``farmer_id``, which defaults to the
    configured ``DEFAULT_USER_ID`` so headerless requests find it.
    """
    if is_seeded(db):
        return
    farmer_id = farmer_id or config.DEFAULT_USER_ID
    now = db.now()
    seed_users(db, now, farmer_id)
    seed_farm(db, now, farmer_id)
    seed_learning(db, now, farmer_id)
    seed_marketplace(db)
    seed_achievements(db, now, farmer_id)
    seed_community(db, now, farmer_id)
    seed_weather(db, now)

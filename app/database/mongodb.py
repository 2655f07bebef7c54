# app/database/mongodb.py
import os

from motor.motor_asyncio import AsyncIOMotorClient

MONGO_URL = os.getenv("MONGO_URL", "mongodb://localhost:27017")
MONGO_DB = os.getenv("MONGO_DB", "farsi_practice")

client = AsyncIOMotorClient(MONGO_URL)

db = client[MONGO_DB]
content_collection = db.get_collection("content")
categories_collection = db.get_collection("categories")
tags_collection = db.get_collection("tags")
lessons_collection = db.get_collection("lessons")
practice_sessions_collection = db["practice_sessions"]
practice_history_collection = db["practice_history"]

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from app.api import authoring
from app.api import content
from app.api import practice
from app.api import quiz

app = FastAPI(title="Farsi Practice")

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(content.router)
app.include_router(quiz.router)
app.include_router(authoring.router)

app.include_router(practice.router)
@app.get("/health")
async def health_check():
    return {"status": "ok"}

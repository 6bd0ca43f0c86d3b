import logging
from fastapi import FastAPI
from dotenv import load_dotenv
load_dotenv()

from app.scheduling.router import router as scheduling_router

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Care Order Scheduling Service")

app.include_router(scheduling_router)

@app.get("/health")
def health():
    return {"status": "ok"}

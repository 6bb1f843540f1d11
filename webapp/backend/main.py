"""FastAPI application for the room supervision scheduler."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import candidates, distribution, export

app = FastAPI(
    title="Room Supervision Scheduler",
    description="Distributes supervisors over rooms and days with randomized retry search",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allow all origins in development
    allow_credentials=False,  # Must be False when allow_origins is "*"
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["*"],
)

app.include_router(candidates.router, prefix="/api/candidates", tags=["candidates"])
app.include_router(distribution.router, prefix="/api/distribution", tags=["distribution"])
app.include_router(export.router, prefix="/api/export", tags=["export"])


@app.get("/")
def root():
    return {"message": "Room Supervision Scheduler API", "docs": "/docs"}

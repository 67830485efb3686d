"""
FastAPI Backend dla Hex Targeting Engine.

Endpoints:
    GET  /api/health          - health check
    GET  /api/arenas          - lista aren
    GET  /api/arenas/{key}    - arena + podgląd planszy
    GET  /api/skills          - lista skilli z konfiguracją targetingu
    GET  /api/skills/{id}     - jeden skill
    POST /api/resolve         - rozstrzygnij cel
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.routers import arenas, skills, targeting
from hextarget.core.hex_grid import BOARD


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 Hex Targeting API starting...")
    print(f"🗺️  Board: {len(BOARD.tiles)} tiles, {len(BOARD.rows)} rows")
    yield
    print("👋 Hex Targeting API shutting down...")


app = FastAPI(
    title="Hex Targeting API",
    description="Deterministic skill target resolution on the 45-tile hex battlefield",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - allow all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(arenas.router, prefix="/api", tags=["Arenas"])
app.include_router(skills.router, prefix="/api", tags=["Skills"])
app.include_router(targeting.router, prefix="/api", tags=["Targeting"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}

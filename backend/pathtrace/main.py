import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pathtrace.core.graph.graph_loader import seed_sample_graph
from pathtrace.db.database import LOG_LEVEL, SessionLocal, engine, init_db
from pathtrace.routers import dijkstra, graph

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables and make sure there is a graph to route on
    init_db(engine)
    db = SessionLocal()
    try:
        seed_sample_graph(db)
    finally:
        db.close()
    yield


app = FastAPI(title="Dijkstra Graph Visualizer", lifespan=lifespan)

# Allow a local frontend (dev server on localhost:3000) to call this API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(graph.router, prefix="/graph", tags=["Graph"])
app.include_router(dijkstra.router, prefix="/dijkstra", tags=["Dijkstra"])


@app.get("/")
def root():
    return {"message": "Dijkstra shortest-path backend running!"}

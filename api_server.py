from contextlib import asynccontextmanager
from typing import List, Dict, Any, Optional

from fastapi import FastAPI, HTTPException, Depends, Request, UploadFile, File
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import FileResponse
from pydantic import BaseModel
from pathlib import Path
import uvicorn

from graphview.config import settings
from graphview.graph.loader import GraphLoader
from graphview.graph.neo4j_client import Neo4jClient, GraphQueryError
from graphview.graph.view import GraphView, node_options
from graphview.uploads import save_avatar
from graphview.utils.logger import app_logger


logger = app_logger.bind(component="api_server")

_graph_client: Optional[Neo4jClient] = None


def get_graph_client() -> Neo4jClient:
    """FastAPI dependency returning the shared Neo4j client."""
    global _graph_client
    if _graph_client is None:
        _graph_client = Neo4jClient()
    return _graph_client


def get_graph_view(request: Request) -> GraphView:
    return request.app.state.graph_view


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _graph_client
    yield
    if _graph_client is not None:
        _graph_client.close()
        _graph_client = None


app = FastAPI(title="Graph Viewer API", version="1.0.0", lifespan=lifespan)
app.state.graph_view = GraphView()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

static_dir = Path(settings.static_dir)
app.mount("/static", StaticFiles(directory=str(static_dir), check_dir=False), name="static")
app.mount("/uploads", StaticFiles(directory=str(settings.upload_path), check_dir=False), name="uploads")


class CreateNodeRequest(BaseModel):
    label: str = "Person"
    name: Optional[str] = None
    avatar_url: Optional[str] = None


class CreateRelRequest(BaseModel):
    fromId: Optional[int] = None
    toId: Optional[int] = None
    type: str = "FRIEND_OF"


class CypherRequest(BaseModel):
    query: Optional[str] = None
    params: Dict[str, Any] = {}


class GraphDataResponse(BaseModel):
    nodes: List[Dict[str, Any]]
    edges: List[Dict[str, Any]]


@app.get("/")
async def root():
    """Serve the main HTML page."""
    return FileResponse(static_dir / "index.html")


@app.get("/api/nodes")
def list_nodes(client: Neo4jClient = Depends(get_graph_client)):
    """List nodes for the relationship form."""
    try:
        nodes = client.list_nodes()
        return {"nodes": [node.to_dict() for node in nodes]}
    except GraphQueryError as e:
        logger.error(f"Error listing nodes: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)


@app.get("/api/node-options")
def list_node_options(client: Neo4jClient = Depends(get_graph_client)):
    """List nodes as sorted select options."""
    try:
        return {"options": node_options(client.list_nodes())}
    except GraphQueryError as e:
        logger.error(f"Error listing node options: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)


@app.post("/api/create-node")
def create_node(request: CreateNodeRequest, client: Neo4jClient = Depends(get_graph_client)):
    """Create a node from the node form."""
    name = (request.name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Missing 'name'")

    label = request.label.strip() or "Person"
    try:
        node = client.create_node(name, label=label, avatar_url=request.avatar_url or None)
        return {"created": node.to_dict()}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GraphQueryError as e:
        logger.error(f"Error creating node: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)


@app.post("/api/create-rel")
def create_relationship(request: CreateRelRequest, client: Neo4jClient = Depends(get_graph_client)):
    """Create a relationship between two existing nodes."""
    if request.fromId is None or request.toId is None:
        raise HTTPException(status_code=400, detail="Missing 'fromId' or 'toId'")

    rel_type = request.type.strip() or "FRIEND_OF"
    try:
        result = client.create_relationship(request.fromId, request.toId, rel_type)
        return {"ok": True, **result.to_dict()}
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except GraphQueryError as e:
        logger.error(f"Error creating relationship: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)


@app.post("/api/cypher", response_model=GraphDataResponse)
def run_cypher(request: CypherRequest, client: Neo4jClient = Depends(get_graph_client)):
    """Run a Cypher query and return the graph it touches."""
    if not request.query:
        raise HTTPException(status_code=400, detail="Missing 'query'")

    try:
        result = client.run_query(request.query, request.params)
        return GraphDataResponse(**result.to_dict())
    except GraphQueryError as e:
        logger.error(f"Error running cypher: {e.message}")
        raise HTTPException(status_code=500, detail=e.message)


@app.post("/api/upload-avatar")
def upload_avatar(file: Optional[UploadFile] = File(None)):
    """Store an avatar image; the returned URL goes into avatar_url."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Missing file")
    return {"url": save_avatar(file)}


@app.get("/api/graph")
def get_graph(
    client: Neo4jClient = Depends(get_graph_client),
    view: GraphView = Depends(get_graph_view),
):
    """Load the graph snapshot and return it ready for vis-network."""
    return view.refresh(GraphLoader(client))


@app.post("/api/view/physics")
def toggle_physics(view: GraphView = Depends(get_graph_view)):
    """Switch the physics simulation on or off."""
    enabled = view.toggle_physics()
    return {"physics_enabled": enabled, "options": view.options()}


if __name__ == "__main__":
    logger.info("Starting Graph Viewer API server")

    uvicorn.run(
        "api_server:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        log_level="info",
    )

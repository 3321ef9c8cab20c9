import asyncio

from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field
from loguru import logger

from depgraph import __version__
from depgraph.config import settings
from depgraph.graph import DependencyQueryService, graph_from_dict
from depgraph.services import DependencyAnalyzer, dependency_analyzer, get_directory_structure

# create router
router = APIRouter()


def get_analyzer() -> DependencyAnalyzer:
    """Analyzer dependency (overridden in tests)"""
    return dependency_analyzer


# response models
class HealthResponse(BaseModel):
    status: str
    version: str


class GraphNode(BaseModel):
    id: str
    label: str


class GraphEdge(BaseModel):
    source: str
    target: str
    type: str


class GraphData(BaseModel):
    """Full dependency graph"""
    nodes: List[GraphNode]
    edges: List[GraphEdge]


class DependenciesResponse(BaseModel):
    """Response for dependency analysis endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    graph_data: GraphData = Field(alias="graphData")
    file_structure: List[Dict[str, Any]] = Field(alias="fileStructure")
    default_root: Optional[str] = Field(default=None, alias="defaultRoot")


class SubgraphNode(BaseModel):
    """A node of a scoped query with its distance from the root"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    depth: int
    is_root: bool = Field(alias="isRoot")


class SubgraphResponse(BaseModel):
    """Response for subgraph queries"""
    model_config = ConfigDict(populate_by_name=True)

    root: Optional[str] = None
    depth: int
    include_indirect: bool = Field(alias="includeIndirect")
    nodes: List[SubgraphNode]
    edges: List[GraphEdge]


class RelationsResponse(BaseModel):
    """Response for direct relations endpoint"""
    root: Optional[str] = None
    dependencies: List[str]
    dependents: List[str]


class SubgraphRequest(BaseModel):
    """Stateless subgraph query over a client-held graph"""
    graph: GraphData
    root: str
    depth: int = Field(default=settings.default_depth, ge=1, le=settings.max_depth)
    indirect: bool = False


def _subgraph_response(
    service: DependencyQueryService, file: str, depth: int, indirect: bool
) -> SubgraphResponse:
    root = service.resolve(file)
    if root is None:
        logger.info(f"No graph node matches file: {file}")
        return SubgraphResponse(root=None, depth=depth, include_indirect=indirect, nodes=[], edges=[])

    subgraph = service.compute_subgraph(root, depth, indirect)
    payload = subgraph.to_dict()
    return SubgraphResponse(
        root=root,
        depth=depth,
        include_indirect=indirect,
        nodes=payload["nodes"],
        edges=payload["edges"],
    )


# health check
@router.get("/health", response_model=HealthResponse)
async def health_check():
    """health check interface"""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/dependencies", response_model=DependenciesResponse, response_model_by_alias=True)
async def get_dependencies(
    org: str = Query(..., description="Repository owner"),
    repo: str = Query(..., description="Repository name"),
    branch: str = Query(..., description="Branch name"),
    refresh: bool = Query(False, description="Re-run the analysis even if a cached result exists"),
    analyzer: DependencyAnalyzer = Depends(get_analyzer),
):
    """
    Analyze the dependencies of a cloned repository branch.

    Runs dependency-cruiser on storage/repos/<org>/<repo>/<branch>/code and
    returns the file-level dependency graph together with the directory
    tree of the checkout.

    Example:
        GET /dependencies?org=acme&repo=web&branch=main
    """
    result = await analyzer.analyze(org, repo, branch, refresh=refresh)

    logger.info("Getting file structure...")
    file_structure = await asyncio.to_thread(get_directory_structure, result.repo_root)
    logger.info(f"Found {len(file_structure)} top-level items in file structure.")

    service = DependencyQueryService(result.graph)
    return DependenciesResponse(
        graph_data=result.graph.to_dict(),
        file_structure=file_structure,
        default_root=service.default_root(),
    )


@router.get("/dependencies/subgraph", response_model=SubgraphResponse)
async def get_dependency_subgraph(
    org: str = Query(..., description="Repository owner"),
    repo: str = Query(..., description="Repository name"),
    branch: str = Query(..., description="Branch name"),
    file: str = Query(..., description="File path to center the graph on"),
    depth: int = Query(settings.default_depth, ge=1, le=settings.max_depth, description="Traversal depth"),
    indirect: bool = Query(False, description="Include edges between indirect relations"),
    analyzer: DependencyAnalyzer = Depends(get_analyzer),
):
    """
    Dependencies and dependents of a file up to ``depth`` hops.

    ``file`` may be absolute, prefixed with the checkout folder or a bare
    file name. When it matches no file of the graph the response has
    ``root: null`` and no nodes.
    """
    result = await analyzer.analyze(org, repo, branch)
    return _subgraph_response(DependencyQueryService(result.graph), file, depth, indirect)


@router.get("/dependencies/relations", response_model=RelationsResponse)
async def get_direct_relations(
    org: str = Query(..., description="Repository owner"),
    repo: str = Query(..., description="Repository name"),
    branch: str = Query(..., description="Branch name"),
    file: str = Query(..., description="File path to inspect"),
    analyzer: DependencyAnalyzer = Depends(get_analyzer),
):
    """Immediate dependencies and dependents of a file"""
    result = await analyzer.analyze(org, repo, branch)
    service = DependencyQueryService(result.graph)

    root = service.resolve(file)
    if root is None:
        return RelationsResponse(root=None, dependencies=[], dependents=[])

    relations = service.list_direct_relations(root)
    logger.info(
        f"Found {len(relations.dependencies)} dependencies and {len(relations.dependents)} dependents for {root}"
    )
    return RelationsResponse(root=root, **relations.to_dict())


@router.post("/graph/subgraph", response_model=SubgraphResponse)
async def query_graph_subgraph(request: SubgraphRequest):
    """Subgraph query over a graph supplied in the request body"""
    graph = graph_from_dict(request.graph.model_dump())
    return _subgraph_response(DependencyQueryService(graph), request.root, request.depth, request.indirect)

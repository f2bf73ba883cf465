# src/face_fingerprint/server/models.py
from pydantic import BaseModel, Field
from typing import List, Optional

# --- Request Models ---

class MatchRequest(BaseModel):
    """Body of the /match endpoint."""
    target: List[float] = Field(..., description="Embedding to look up")
    candidates: List[List[float]] = Field(default_factory=list, description="Candidate embeddings, searched in order")

class AverageRequest(BaseModel):
    """Body of the /average endpoint."""
    embeddings: List[List[float]] = Field(default_factory=list, description="Embeddings of one identity")

# --- Response Models ---

class EmbedResponse(BaseModel):
    """Response model for the /embed endpoint."""
    embedding: List[float] = Field(..., description="L2-normalised embedding")
    size: int = Field(..., description="Number of values in the embedding (128)")
    elapsed_ms: int = Field(..., description="Processing time in milliseconds")

class CompareResponse(BaseModel):
    """Response model for the /compare endpoint."""
    similarity: float = Field(..., description="Cosine similarity score (-1.0 to 1.0)")
    is_match: bool = Field(..., description="Whether the similarity meets the threshold")
    threshold: float = Field(..., description="Threshold used for is_match")
    elapsed_ms: int = Field(..., description="Processing time in milliseconds")

class MatchResponse(BaseModel):
    """Response model for the /match endpoint."""
    index: Optional[int] = Field(None, description="Index of the best candidate, null if none matched")
    similarity: Optional[float] = Field(None, description="Similarity of the best candidate")

class AverageResponse(BaseModel):
    """Response model for the /average endpoint."""
    embedding: List[float] = Field(..., description="Centroid embedding")

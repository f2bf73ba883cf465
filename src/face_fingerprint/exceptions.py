# src/face_fingerprint/exceptions.py
from typing import Optional
"""Custom exceptions for the application."""

class FaceFingerprintError(Exception):
    """Base exception for face fingerprinting errors."""
    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

class ImageLoadError(FaceFingerprintError):
    """Error loading, decoding or reading pixels from an image."""
    def __init__(self, message: str):
        super().__init__(1000, f"Image Loading Error: {message}")

class ModelError(FaceFingerprintError):
    """Errors related to embedding backend setup."""
    def __init__(self, message: str):
        super().__init__(1003, f"Model Error: {message}")

class EmbeddingError(FaceFingerprintError):
    """No embedding could be produced for an image."""
    def __init__(self, message: str = "Failed to generate embedding for the face image."):
        super().__init__(1004, message)


class InvalidInputError(FaceFingerprintError):
    """Error for invalid user input (e.g., bad JSON)."""
    def __init__(self, message: str):
        super().__init__(3000, f"Invalid Input: {message}")


class ShapeMismatchError(FaceFingerprintError):
    """Embeddings of different lengths were combined."""
    def __init__(self, expected: int, got: int, message: Optional[str] = None):
        self.expected = expected
        self.got = got
        msg = message or f"Embedding length mismatch: expected {expected}, got {got}."
        super().__init__(3001, msg)

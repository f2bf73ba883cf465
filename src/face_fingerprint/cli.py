# src/face_fingerprint/cli.py

import json
import logging
from typing import List, Optional
from pathlib import Path
import typer

from . import core as core_func
from . import server as server_func
from .exceptions import FaceFingerprintError, InvalidInputError, ModelError
from .grouping import group_embeddings
from .utils import parse_embedding

# --- Logger Configuration ---
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("face_fingerprint.cli")
logging.getLogger("face_fingerprint.embedding").setLevel(logging.INFO)
logging.getLogger("face_fingerprint.matching").setLevel(logging.INFO)
logging.getLogger("face_fingerprint.utils").setLevel(logging.INFO)
# --- End Logger Configuration ---


app = typer.Typer(help="Perceptual face fingerprinting: embed, compare, match and group face crops.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    backend: str = typer.Option("grid", "--backend", "-b", help="Embedding backend to use."),
):
    """Configure logging and the shared face processor."""
    if verbose:
        logging.getLogger("face_fingerprint").setLevel(logging.DEBUG)
    try:
        core_func.initialize_global_processor(backend=backend, force_reinitialize=True)
    except ModelError as e:
        logger.error(f"CLI: Failed to initialize FaceProcessor: {e}")
        typer.echo(f"Error: {e.message}")
        raise typer.Exit(code=1)


@app.command()
def embed(
    image: Path = typer.Argument(..., help="Path to the face crop image.", exists=True, dir_okay=False, readable=True),
):
    """Prints the embedding of a face crop as a JSON array."""
    logger.info(f"CLI: Received embed command for '{image}'")
    try:
        features = core_func.extract_features(str(image))
    except FaceFingerprintError as e:
        logger.error(f"Embedding failed for '{image}': {e}")
        typer.echo(f"Error: {e.message}")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(features))


@app.command()
def compare(
    img1: Path = typer.Argument(..., help="Path to the first face crop."),
    img2: Path = typer.Argument(..., help="Path to the second face crop."),
):
    """Compares two face crops and prints the similarity score."""
    logger.info(f"CLI: Received compare command for '{img1}' and '{img2}'")
    similarity = core_func.compare_faces(str(img1), str(img2))
    if similarity is None:
        typer.echo("Comparison could not be completed. Check logs for details.")
        raise typer.Exit(code=1)
    same = similarity >= core_func.SIMILARITY_THRESHOLD
    typer.echo(f"Similarity Score: {similarity:.4f}")
    typer.echo(f"Same person: {'yes' if same else 'no'}")


@app.command()
def match(
    images: List[Path] = typer.Argument(..., help="Target face crop followed by candidate crops."),
    embedding: Optional[str] = typer.Option(
        None, "--embedding", "-e",
        help='Target embedding as a JSON array (e.g. output of "embed"). All images are then candidates.'),
):
    """Finds the candidate most similar to the target face."""
    if embedding is not None:
        try:
            target_embedding = parse_embedding(embedding)
        except InvalidInputError as e:
            typer.echo(f"Error: {e.message}")
            raise typer.Exit(code=1)
        candidates = images
        logger.info(f"CLI: Received match command: JSON target, {len(candidates)} candidates")
    else:
        if len(images) < 2:
            typer.echo("Error: provide a target image and at least one candidate.")
            raise typer.Exit(code=1)
        target, candidates = images[0], images[1:]
        logger.info(f"CLI: Received match command: target='{target}', {len(candidates)} candidates")
        try:
            target_embedding = core_func.extract_features(str(target))
        except (FileNotFoundError, FaceFingerprintError) as e:
            logger.error(f"Failed to embed target '{target}': {e}")
            typer.echo(f"Error processing target image: {e}")
            raise typer.Exit(code=1)

    gallery = []
    for candidate in candidates:
        try:
            gallery.append((str(candidate), core_func.extract_features(str(candidate))))
        except (FileNotFoundError, FaceFingerprintError) as e:
            # A bad candidate is skipped, not fatal
            logger.warning(f"Skipping candidate '{candidate}': {e}")

    result = core_func.search_similar_face(target_embedding, gallery)
    if result is None:
        typer.echo("No matching face found.")
        return
    matched, score = result
    typer.echo(f"Best match: {matched} (similarity {score:.4f})")


@app.command()
def group(
    images: List[Path] = typer.Argument(..., help="Face crops to group into identities."),
):
    """Groups face crops into persons and prints one line per person."""
    logger.info(f"CLI: Received group command for {len(images)} images")
    paths: List[Path] = []
    embeddings = []
    for image in images:
        try:
            embeddings.append(core_func.extract_features(str(image)))
            paths.append(image)
        except (FileNotFoundError, FaceFingerprintError) as e:
            logger.warning(f"Skipping '{image}': {e}")

    for person in group_embeddings(embeddings):
        members = ", ".join(str(paths[i]) for i in person.face_indices)
        typer.echo(f"{person.name} ({person.face_count} faces): {members}")


@app.command()
def server(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host address to bind the server to."),
    port: int = typer.Option(8080, "--port", "-p", help="Port number for the API server."),
    workers: int = typer.Option(1, "--workers", "-w", help="Number of worker processes."),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload (for development only)."),
):
    """Starts the REST API server using Uvicorn."""
    logger.info(f"CLI: Server command with Host={host}, Port={port}, Workers={workers}, Reload={reload}")
    try:
        server_func.start_server(host=host, port=port, workers=workers, reload=reload)
    except Exception as e:
        logger.error(f"CLI: Failed to start or run the server: {e}", exc_info=True)
        typer.echo(f"Error: Failed to start or run the server: {e}")
        raise typer.Exit(code=1)
    typer.echo("Server stopped.")


if __name__ == "__main__":
    app()

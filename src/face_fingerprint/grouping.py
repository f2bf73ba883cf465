# src/face_fingerprint/grouping.py
"""
Grouping face embeddings into identities.

A :class:`Person` is a cluster of face embeddings summarised by its average
embedding. New faces are compared against each person's average; the best
person at or above the matching threshold absorbs the face and its average
is recomputed from all member faces.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .aggregation import average_embedding
from .similarity import SIMILARITY_THRESHOLD, cosine_similarity
from .vector_math import VectorLike

logger = logging.getLogger(__name__)


@dataclass
class Person:
    person_id: str
    name: str
    average_embedding: np.ndarray
    face_indices: List[int] = field(default_factory=list)

    @property
    def face_count(self) -> int:
        return len(self.face_indices)


def find_matching_person(embedding: VectorLike, persons: Sequence[Person]) -> Optional[str]:
    """Return the id of the person whose average best matches ``embedding``."""
    best_id: Optional[str] = None
    best_similarity = float("-inf")
    for person in persons:
        similarity = cosine_similarity(embedding, person.average_embedding)
        if similarity > best_similarity:
            best_similarity = similarity
            best_id = person.person_id
    if best_id is not None and best_similarity >= SIMILARITY_THRESHOLD:
        return best_id
    return None


def merge_persons(keep: Person, merge: Person, embeddings: Sequence[VectorLike]) -> Person:
    """
    Fold ``merge`` into ``keep``.

    ``embeddings`` is the full face list that ``face_indices`` refer to; the
    merged average is recomputed from every member face.
    """
    indices = sorted(set(keep.face_indices) | set(merge.face_indices))
    centroid = average_embedding([embeddings[i] for i in indices])
    logger.info(f"Merged person '{merge.person_id}' into '{keep.person_id}' ({len(indices)} faces).")
    return Person(
        person_id=keep.person_id,
        name=keep.name,
        average_embedding=centroid,
        face_indices=indices,
    )


def group_embeddings(embeddings: Sequence[VectorLike]) -> List[Person]:
    """Greedily assign each embedding, in order, to a new or existing person."""
    persons: List[Person] = []
    for idx, embedding in enumerate(embeddings):
        match_id = find_matching_person(embedding, persons)
        if match_id is None:
            person = Person(
                person_id=f"person_{len(persons) + 1:04d}",
                name=f"Person {len(persons) + 1}",
                average_embedding=average_embedding([embedding]),
                face_indices=[idx],
            )
            persons.append(person)
            logger.debug(f"Face {idx} starts {person.person_id}.")
            continue

        pos = next(i for i, p in enumerate(persons) if p.person_id == match_id)
        person = persons[pos]
        members = person.face_indices + [idx]
        persons[pos] = Person(
            person_id=person.person_id,
            name=person.name,
            average_embedding=average_embedding([embeddings[i] for i in members]),
            face_indices=members,
        )
        logger.debug(f"Face {idx} joins {match_id}.")

    logger.info(f"Grouped {len(embeddings)} faces into {len(persons)} persons.")
    return persons

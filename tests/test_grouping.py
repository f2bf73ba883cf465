import numpy as np

from face_fingerprint.grouping import Person, find_matching_person, group_embeddings, merge_persons
from face_fingerprint.vector_math import normalize


A = [1.0, 0.0, 0.0]
A_NEAR = [0.95, 0.1, 0.0]
B = [0.0, 1.0, 0.0]


def test_no_persons_no_match():
    assert find_matching_person(A, []) is None


def test_find_matching_person_picks_best_above_threshold():
    persons = [
        Person("p1", "Person 1", np.array(B), [0]),
        Person("p2", "Person 2", np.array(A_NEAR), [1]),
        Person("p3", "Person 3", np.array(A), [2]),
    ]
    assert find_matching_person(A, persons) == "p3"
    assert find_matching_person([0.0, 0.0, 1.0], persons) is None


def test_group_embeddings_clusters_similar_faces():
    persons = group_embeddings([A, B, A_NEAR])
    assert [p.face_indices for p in persons] == [[0, 2], [1]]
    assert [p.name for p in persons] == ["Person 1", "Person 2"]
    assert persons[0].face_count == 2
    np.testing.assert_allclose(
        persons[0].average_embedding,
        normalize((np.array(A) + np.array(A_NEAR)) / 2),
    )


def test_group_embeddings_empty():
    assert group_embeddings([]) == []


def test_single_face_person_keeps_raw_embedding():
    persons = group_embeddings([[2.0, 0.0]])
    assert persons[0].average_embedding.tolist() == [2.0, 0.0]


def test_merge_persons_recomputes_average():
    embeddings = [A, B, A_NEAR]
    keep = Person("p1", "Alice", np.array(A), [0])
    merge = Person("p2", "Person 2", np.array(A_NEAR), [2])
    merged = merge_persons(keep, merge, embeddings)
    assert merged.person_id == "p1"
    assert merged.name == "Alice"
    assert merged.face_indices == [0, 2]
    np.testing.assert_allclose(
        merged.average_embedding,
        normalize((np.array(A) + np.array(A_NEAR)) / 2),
    )

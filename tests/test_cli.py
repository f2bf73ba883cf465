import json

from typer.testing import CliRunner

from face_fingerprint.cli import app
from face_fingerprint.core import FaceProcessor, extract_features

runner = CliRunner()


def test_embed_prints_json_vector(face_files):
    result = runner.invoke(app, ["embed", str(face_files["a"])])
    assert result.exit_code == 0, result.output
    line = next(l for l in result.output.splitlines() if l.startswith("["))
    assert len(json.loads(line)) == 128


def test_compare_same_crop(face_files):
    result = runner.invoke(app, ["compare", str(face_files["a"]), str(face_files["a_copy"])])
    assert result.exit_code == 0, result.output
    assert "Similarity Score: 1.0000" in result.output
    assert "Same person: yes" in result.output


def test_compare_missing_file_exits_nonzero(face_files, tmp_path):
    result = runner.invoke(app, ["compare", str(face_files["a"]), str(tmp_path / "missing.png")])
    assert result.exit_code == 1


def test_match(face_files):
    result = runner.invoke(app, ["match", str(face_files["a"]), str(face_files["other"]), str(face_files["a_copy"])])
    assert result.exit_code == 0, result.output
    assert f"Best match: {face_files['a_copy']}" in result.output


def test_match_without_similar_candidate(face_files):
    result = runner.invoke(app, ["match", str(face_files["a"]), str(face_files["other"])])
    assert result.exit_code == 0, result.output
    assert "No matching face found." in result.output


def test_group(face_files):
    result = runner.invoke(app, ["group", str(face_files["a"]), str(face_files["other"]), str(face_files["a_copy"])])
    assert result.exit_code == 0, result.output
    assert "Person 1 (2 faces)" in result.output
    assert "Person 2 (1 faces)" in result.output


def test_unknown_backend(face_files):
    result = runner.invoke(app, ["--backend", "arcface", "embed", str(face_files["a"])])
    assert result.exit_code == 1


def test_match_against_json_target(face_files):
    target = json.dumps(extract_features(str(face_files["a"]), FaceProcessor()))
    result = runner.invoke(app, ["match", "--embedding", target, str(face_files["other"]), str(face_files["a_copy"])])
    assert result.exit_code == 0, result.output
    assert f"Best match: {face_files['a_copy']}" in result.output


def test_match_rejects_bad_json_target(face_files):
    result = runner.invoke(app, ["match", "-e", "[1, \"x\"]", str(face_files["a"])])
    assert result.exit_code == 1
    assert "Invalid Input" in result.output


def test_match_needs_a_candidate(face_files):
    result = runner.invoke(app, ["match", str(face_files["a"])])
    assert result.exit_code == 1

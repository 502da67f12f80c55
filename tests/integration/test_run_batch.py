from __future__ import annotations

import run_batch
from tests.fakes import FakeClassifier


def test_run_batch_writes_export(tmp_path, monkeypatch):
    monkeypatch.setattr(run_batch, "build_classifier", lambda settings: FakeClassifier())
    source = tmp_path / "reviews.csv"
    source.write_text('review,rating\n"Arrived broken, refunded",1\nLovely colour and fit,5\n', encoding="utf-8")
    output = tmp_path / "out.csv"

    assert run_batch.main([str(source), "--output", str(output)]) == 0

    lines = output.read_text(encoding="utf-8").split("\n")
    assert lines[0] == "Timestamp,Prediction,Confidence,Review Text"
    assert len(lines) == 3


def test_run_batch_text_file(tmp_path, monkeypatch):
    monkeypatch.setattr(run_batch, "build_classifier", lambda settings: FakeClassifier())
    source = tmp_path / "reviews.txt"
    source.write_text("One review per line here\nshort\n", encoding="utf-8")
    output = tmp_path / "out.csv"

    assert run_batch.main([str(source), "-o", str(output)]) == 0
    assert len(output.read_text(encoding="utf-8").split("\n")) == 2


def test_run_batch_reports_failures(tmp_path, monkeypatch):
    monkeypatch.setattr(run_batch, "build_classifier", lambda settings: FakeClassifier(fail=True))
    source = tmp_path / "reviews.txt"
    source.write_text("One review per line here\n", encoding="utf-8")

    assert run_batch.main([str(source), "-o", str(tmp_path / "out.csv")]) == 1
    assert run_batch.main([str(tmp_path / "missing.csv")]) == 1

"""Tests for the example dataset generator."""

from __future__ import annotations

import pytest

from chartboard.constants import (
    COL_CGPA,
    COL_COLOR,
    COL_INCOME,
    COL_SELLING_PRICE,
    DATASET_CARS,
    DATASET_FILENAMES,
    DATASET_FINANCIAL,
    DATASET_MENTAL_HEALTH,
)
from chartboard.csv_loader import read_rows
from chartboard.example_data import N_APPLICANTS, N_CARS, N_STUDENTS, generate_example_csvs

pytestmark = pytest.mark.unit


def test_generator_is_deterministic(tmp_path) -> None:
    """Two runs write byte-identical files."""

    first = generate_example_csvs(str(tmp_path / "a"))
    second = generate_example_csvs(str(tmp_path / "b"))

    for key in DATASET_FILENAMES:
        with open(first[key], "rb") as fa, open(second[key], "rb") as fb:
            assert fa.read() == fb.read()


def test_generated_files_have_expected_shape(example_paths) -> None:
    """Row counts and key columns match the real datasets' layout."""

    cars = read_rows(example_paths[DATASET_CARS])
    financial = read_rows(example_paths[DATASET_FINANCIAL])
    students = read_rows(example_paths[DATASET_MENTAL_HEALTH])

    assert len(cars) == N_CARS
    assert len(financial) == N_APPLICANTS
    assert len(students) == N_STUDENTS
    assert {COL_COLOR, COL_SELLING_PRICE} <= set(cars[0])
    assert COL_INCOME in financial[0]
    assert COL_CGPA in students[0]

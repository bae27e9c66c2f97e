"""
Example data generator for Chartboard.

Writes three synthetic CSV files with the same headers as the real
datasets, so every chart has something to draw without a download:

- ``car_prices_subset.csv``: 600 used-car sales, 2001-2015.  Colours
  include synonym spellings ("gray", "charcoal") and a few values no
  vocabulary accepts ("—", "teal"); some prices and years are blank or
  non-numeric.
- ``financial_risk_assessment.csv``: 400 loan applicants, with roughly
  8 % of Income cells blank.
- ``Student_Mental_health.csv``: 101 survey answers, some CGPA bands
  carrying the trailing space seen in the published survey.

The generator is seeded, so output is identical on every run.
"""

import csv
import os
import random

from .constants import (
    CGPA_BANDS, COL_ANXIETY, COL_BODY, COL_CGPA, COL_COLOR, COL_CONDITION,
    COL_CREDIT_SCORE, COL_DEPRESSION, COL_EDUCATION, COL_INCOME,
    COL_LOAN_AMOUNT, COL_MAKE, COL_ODOMETER, COL_PANIC_ATTACK,
    COL_RISK_RATING, COL_SELLING_PRICE, COL_TRANSMISSION, COL_TREATMENT,
    COL_YEAR, DATASET_CARS, DATASET_FILENAMES, DATASET_FINANCIAL,
    DATASET_MENTAL_HEALTH, EDUCATION_LEVELS, RISK_RATINGS,
)


N_CARS = 600
N_APPLICANTS = 400
N_STUDENTS = 101

# make → (base price, premium factor)
_MAKES = {
    'Ford': (14000, 1.0),
    'Chevrolet': (13500, 1.0),
    'Nissan': (12500, 0.95),
    'Toyota': (15000, 1.05),
    'Honda': (14500, 1.05),
    'BMW': (24000, 1.6),
    'Kia': (11000, 0.9),
}
_BODIES = ['Sedan', 'SUV', 'Coupe', 'Convertible', 'Minivan', 'Wagon']

# Colour spellings with relative frequency; the tail is rejected
_COLOR_WEIGHTS = [
    ('black', 20), ('white', 18), ('silver', 14), ('gray', 10),
    ('blue', 9), ('red', 9), ('charcoal', 3), ('brown', 2), ('beige', 2),
    ('green', 2), ('gold', 2), ('burgundy', 2), ('purple', 1),
    ('orange', 1), ('yellow', 1), ('pink', 1), ('—', 2), ('teal', 1),
]


def _write_csv(path: str, header, rows) -> None:
    with open(path, 'w', encoding='utf-8', newline='') as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        writer.writerows(rows)


def _car_rows(rng: random.Random):
    colors = [c for c, _ in _COLOR_WEIGHTS]
    weights = [w for _, w in _COLOR_WEIGHTS]
    rows = []
    for _ in range(N_CARS):
        make = rng.choice(list(_MAKES))
        base, premium = _MAKES[make]
        year = rng.randint(2001, 2015)
        body = rng.choice(_BODIES)
        transmission = 'manual' if rng.random() < 0.15 else 'automatic'
        condition = rng.randint(10, 49)
        odometer = max(10, int(rng.gauss((2016 - year) * 12000, 8000)))
        color = rng.choices(colors, weights)[0]
        age_factor = 0.88 ** (2015 - year)
        price = base * premium * age_factor * (0.6 + condition / 60.0)
        price = max(200, int(round(rng.gauss(price, price * 0.12), -2)))

        year_cell = str(year)
        price_cell = str(price)
        roll = rng.random()
        if roll < 0.02:
            price_cell = ''
        elif roll < 0.03:
            price_cell = 'n/a'
        elif roll < 0.04:
            year_cell = ''
        if rng.random() < 0.02:
            transmission = ''

        rows.append([
            year_cell, make, body, transmission, condition, odometer,
            color, price_cell,
        ])
    return rows


def _financial_rows(rng: random.Random):
    # Education level shifts income upward
    income_base = {
        'High School': 38000, "Bachelor's": 55000,
        "Master's": 72000, 'PhD': 90000,
    }
    rows = []
    for _ in range(N_APPLICANTS):
        education = rng.choice(EDUCATION_LEVELS)
        income = max(5000, int(rng.gauss(income_base[education], 18000)))
        credit = min(850, max(300, int(rng.gauss(680, 60))))
        loan = int(rng.uniform(5000, 50000))
        if credit >= 720 and income > 60000:
            risk = RISK_RATINGS[0]
        elif credit >= 620:
            risk = RISK_RATINGS[rng.randint(0, 1)]
        else:
            risk = RISK_RATINGS[rng.randint(1, 2)]
        income_cell = '' if rng.random() < 0.08 else str(income)
        rows.append([
            rng.randint(18, 69), rng.choice(['Male', 'Female', 'Non-binary']),
            education, income_cell, credit, loan, risk,
        ])
    return rows


def _mental_health_rows(rng: random.Random):
    rows = []
    for i in range(N_STUDENTS):
        band = rng.choices(CGPA_BANDS, [2, 3, 6, 40, 50])[0]
        if rng.random() < 0.3:
            band += ' '
        depression = 'Yes' if rng.random() < 0.35 else 'No'
        anxiety = 'Yes' if rng.random() < 0.33 else 'No'
        panic = 'Yes' if rng.random() < 0.32 else 'No'
        # Few students with symptoms see a specialist
        sought = depression == 'Yes' and rng.random() < 0.2
        rows.append([
            f"8/7/2020 12:{i % 60:02d}", rng.choice(['Male', 'Female']),
            rng.randint(18, 24), rng.choice(['Engineering', 'BIT', 'Law']),
            f"year {rng.randint(1, 4)}", band,
            'Yes' if rng.random() < 0.15 else 'No',
            depression, anxiety, panic, 'Yes' if sought else 'No',
        ])
    return rows


def generate_example_csvs(output_dir: str) -> dict:
    """Generate the three example CSV files in *output_dir*.

    Returns
    -------
    dict
        ``{dataset_key: path}`` for ``cars``, ``financial`` and
        ``mental_health``.
    """
    os.makedirs(output_dir, exist_ok=True)
    rng = random.Random(42)
    paths = {
        key: os.path.join(output_dir, name)
        for key, name in DATASET_FILENAMES.items()
    }

    # ── Used-car sales ───────────────────────────────────────────────
    _write_csv(
        paths[DATASET_CARS],
        [COL_YEAR, COL_MAKE, COL_BODY, COL_TRANSMISSION, COL_CONDITION,
         COL_ODOMETER, COL_COLOR, COL_SELLING_PRICE],
        _car_rows(rng),
    )

    # ── Financial risk ───────────────────────────────────────────────
    _write_csv(
        paths[DATASET_FINANCIAL],
        ['Age', 'Gender', COL_EDUCATION, COL_INCOME, COL_CREDIT_SCORE,
         COL_LOAN_AMOUNT, COL_RISK_RATING],
        _financial_rows(rng),
    )

    # ── Student mental health ────────────────────────────────────────
    _write_csv(
        paths[DATASET_MENTAL_HEALTH],
        ['Timestamp', 'Choose your gender', 'Age', 'What is your course?',
         'Your current year of Study', COL_CGPA, 'Marital status',
         COL_DEPRESSION, COL_ANXIETY, COL_PANIC_ATTACK, COL_TREATMENT],
        _mental_health_rows(rng),
    )

    return paths

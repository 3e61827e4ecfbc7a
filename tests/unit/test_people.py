"""Tests for fauxchart.people and fauxchart.datasets.births."""
from datetime import datetime

import numpy as np
import pytest

from fauxchart.dates import add_years, random_date
from fauxchart.datasets.births import Births
from fauxchart.people import (
    EARLIEST_BIRTH,
    LATEST_BIRTH,
    Person,
    PersonCollection,
    chi_check_digit,
    make_chi,
    random_chi,
)
from tests.conftest import REFERENCE_DATE


def _valid_chi(chi):
    return len(chi) == 10 and chi.isdigit() and chi_check_digit(chi[:9]) == int(chi[9])


class TestChi:
    def test_check_digit(self):
        # 10*0 + 9*1 + 8*0 + 7*1 + 6*8 + 5*0 + 4*1 + 3*2 + 2*3 = 80; 80 % 11 = 3
        assert chi_check_digit("010180123") == 8

    def test_check_digit_ten_is_invalid(self):
        # weighted sums 10 and 12 leave remainders 10 and 1
        assert chi_check_digit("100000000") == 1
        assert chi_check_digit("000000006") is None

    def test_make_chi_encodes_birth_and_sex(self, rng):
        dob = datetime(1975, 3, 14)
        for gender in ("M", "F"):
            chi = make_chi(dob, gender, rng)
            assert chi.startswith("140375")
            assert _valid_chi(chi)
            assert int(chi[8]) % 2 == (1 if gender == "M" else 0)

    def test_random_chi_valid(self, rng):
        assert all(_valid_chi(random_chi(rng)) for _ in range(200))


class TestPersonCollection:
    def test_generate(self, cohort):
        assert len(cohort) == 200
        for p in cohort:
            assert isinstance(p, Person)
            assert _valid_chi(p.chi)
            assert p.chi.startswith(p.date_of_birth.strftime("%d%m%y"))
            assert p.gender in ("M", "F")
            assert EARLIEST_BIRTH <= p.date_of_birth < LATEST_BIRTH
            assert p.forename and p.surname and p.address
            assert "\n" not in p.address

    def test_deaths_after_birth_and_before_reference(self, cohort):
        dead = [p for p in cohort if p.date_of_death is not None]
        assert 0 < len(dead) < len(cohort)
        for p in dead:
            assert p.date_of_birth <= p.date_of_death <= REFERENCE_DATE

    def test_reproducible(self):
        first = PersonCollection(REFERENCE_DATE).generate(20, np.random.default_rng(3))
        second = PersonCollection(REFERENCE_DATE).generate(20, np.random.default_rng(3))
        assert first.people == second.people

    def test_random_person_from_cohort(self, cohort, rng):
        chis = {p.chi for p in cohort}
        assert all(cohort.random_person(rng).chi in chis for _ in range(50))

    def test_empty_cohort(self, rng):
        with pytest.raises(ValueError, match="empty"):
            PersonCollection().random_person(rng)

    def test_non_positive_size(self, rng):
        with pytest.raises(ValueError):
            PersonCollection().generate(0, rng)

    def test_to_frame(self, cohort):
        df = cohort.to_frame()
        assert len(df) == len(cohort)
        assert list(df.columns) == [
            "chi", "forename", "surname", "gender", "date_of_birth", "date_of_death", "address",
        ]


class TestDates:
    def test_random_date_in_range(self, rng):
        start, end = datetime(2000, 1, 1), datetime(2000, 1, 2)
        assert all(start <= random_date(start, end, rng) < end for _ in range(100))

    def test_random_date_empty_range(self, rng):
        start = datetime(2000, 1, 1)
        assert random_date(start, datetime(1999, 1, 1), rng) == start

    def test_add_years_leap_day(self):
        assert add_years(datetime(2000, 2, 29), 18) == datetime(2018, 2, 28)


class TestBirths:
    def test_headers(self, rng):
        assert Births(rng).headers() == [
            "mother_chi", "healthboard", "date", "partner_chi",
            "baby_chi_1", "baby_chi_2", "baby_chi_3",
        ]

    def test_table(self, cohort):
        births = Births(np.random.default_rng(1), reference_date=REFERENCE_DATE)
        df = births.generate_table(cohort, 6000)
        assert len(df) == 6000
        assert set(df["healthboard"]) == {"T", "F"}
        assert df["baby_chi_1"].notna().all()
        assert df.loc[df["baby_chi_3"].notna(), "baby_chi_2"].notna().all()

        twins = df["baby_chi_2"].notna().mean()
        assert 1 / 30 * 0.6 < twins < 1 / 30 * 1.4

    def test_mother_age_window(self, cohort):
        births = Births(np.random.default_rng(2), reference_date=REFERENCE_DATE)
        for person in list(cohort)[:100]:
            date, youngest = births.generate_row(person)[2], add_years(person.date_of_birth, 18)
            assert date >= youngest
            if date > youngest:
                assert date <= add_years(person.date_of_birth, 55)
                assert date <= REFERENCE_DATE
                if person.date_of_death is not None:
                    assert date <= person.date_of_death

    def test_too_young_mother_gets_eighteenth_birthday(self):
        young = Person("0101051231", "A", "B", "F", datetime(2005, 1, 1), None, "x")
        births = Births(np.random.default_rng(0), reference_date=REFERENCE_DATE)
        assert births.generate_row(young)[2] == datetime(2023, 1, 1)

"""Shared fixtures for the capacity planning tests."""

import pytest

from utils_capacity_planning.records_capacity import ResourceSample


def _samples(date, count, cpu="10", memory="20", network="1000000", power="1000"):
    return [
        ResourceSample.from_row({
            "date": date,
            "cpu_usage": cpu,
            "memory_usage": memory,
            "network_traffic": network,
            "power_consumption": power,
        })
        for _ in range(count)
    ]


@pytest.fixture
def make_samples():
    """Factory: make_samples("2024-01-01", 3, cpu="50") -> three identical samples."""
    return _samples


@pytest.fixture
def sample_csv() -> str:
    return (
        "date,cpu_usage,memory_usage,network_traffic,power_consumption,host\n"
        "2024-01-01,40,50,2000000,1500,db-1\n"
        "2024-01-01,60,70,4000000,2500,db-2\n"
        "\n"
        "2024-01-02,80,,n/a,3000,db-1\n"
        ",10,10,10,10,db-3\n"
    )

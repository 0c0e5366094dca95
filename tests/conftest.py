import pytest

from neongraph.config import SHELL_PROBS_DEFAULT, SHELL_PROBS_INNER, SHELL_RADII
from neongraph.graph3d import generate_cloud, generate_shells, generate_sphere


@pytest.fixture(scope="session")
def sphere_graph():
    return generate_sphere(123, 64, 4, 0.1)


@pytest.fixture(scope="session")
def cloud_graph():
    return generate_cloud(7, 240, 1.2, 5, 0.15, 0.05)


@pytest.fixture(scope="session")
def shell_graph():
    return generate_shells(4242, 220, SHELL_RADII, SHELL_PROBS_DEFAULT, 4, 1, 0.15, 0.05)


@pytest.fixture(scope="session")
def inner_shell_graph():
    return generate_shells(4242, 220, SHELL_RADII, SHELL_PROBS_INNER, 4, 1, 0.15, 0.05)

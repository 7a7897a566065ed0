import numpy as np
import pytest

from core.exceptions import ShapeError
from core.network.admittance import (
    CONSUMER,
    INTERMEDIATE,
    SOURCE,
    AdmittanceTable,
    build_nodal_admittance,
)


def test_diagonal_is_row_sum(meshed_tables):
    re, im = meshed_tables
    Y = build_nodal_admittance(re, im)
    np.testing.assert_allclose(np.diag(Y.G), re.sum(axis=1))
    np.testing.assert_allclose(np.diag(Y.B), im.sum(axis=1))


def test_off_diagonal_is_negated_branch(meshed_tables):
    re, im = meshed_tables
    Y = build_nodal_admittance(re, im)
    for i in range(3):
        for j in range(3):
            if i != j:
                assert Y.G[i, j] == -re[i, j]
                assert Y.B[i, j] == -im[i, j]


def test_default_network_values(default_tables):
    Y = build_nodal_admittance(*default_tables)
    np.testing.assert_array_equal(Y.G, [[4, -4, 0], [-4, 6, -2], [0, -2, 2]])
    np.testing.assert_array_equal(Y.B, [[-12, 12, 0], [12, -18, 6], [0, 6, -6]])


def test_self_term_is_included_in_diagonal():
    re = [[0.5, 1.0, 0.0], [1.0, 0.0, 1.0], [0.0, 1.0, 0.0]]
    im = [[0.0, -3.0, 0.0], [-3.0, 0.25, -3.0], [0.0, -3.0, 0.0]]
    Y = build_nodal_admittance(re, im)
    assert Y.G[SOURCE, SOURCE] == pytest.approx(1.5)
    assert Y.B[INTERMEDIATE, INTERMEDIATE] == pytest.approx(-5.75)


def test_negative_and_zero_admittances_accepted():
    re = [[0.0, -1.0, 0.0], [-1.0, 0.0, 0.0], [0.0, 0.0, 0.0]]
    im = np.zeros((3, 3))
    Y = build_nodal_admittance(re, im)
    assert Y.G[CONSUMER, CONSUMER] == 0.0
    assert Y.G[SOURCE, INTERMEDIATE] == 1.0


def test_real_form_blocks(default_tables):
    Y = build_nodal_admittance(*default_tables)
    g, b = Y.G[SOURCE, INTERMEDIATE], Y.B[SOURCE, INTERMEDIATE]
    np.testing.assert_array_equal(Y.block(SOURCE, INTERMEDIATE), [[g, -b], [b, g]])
    assert Y.real_form.shape == (6, 6)


def test_matrices_are_read_only(default_tables):
    Y = build_nodal_admittance(*default_tables)
    with pytest.raises(ValueError):
        Y.G[0, 0] = 1.0
    with pytest.raises(ValueError):
        Y.real_form[0, 0] = 1.0


def test_builder_does_not_alias_input():
    re = np.ones((3, 3))
    im = np.zeros((3, 3))
    table = AdmittanceTable.from_tables(re, im)
    re[0, 1] = 99.0
    assert table.re[0, 1] == 1.0


@pytest.mark.parametrize("re, im", [
    ([[0.0, 1.0], [1.0, 0.0]], [[0.0, 1.0], [1.0, 0.0]]),                  # 2x2
    (np.zeros((3, 4)), np.zeros((3, 4))),                                   # not square
    (np.zeros((4, 4)), np.zeros((4, 4))),                                   # too large
    (np.zeros((3, 3)), np.zeros((2, 2))),                                   # re/im mismatch
    ([[0.0, 1.0, 0.0], [1.0, 0.0], [0.0, 1.0, 0.0]], np.zeros((3, 3))),     # ragged
    (np.zeros(3), np.zeros(3)),                                             # 1-D
])
def test_shape_errors(re, im):
    with pytest.raises(ShapeError):
        build_nodal_admittance(re, im)

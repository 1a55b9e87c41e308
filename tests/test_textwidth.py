"""Test grapheme segmentation and display widths."""

import pytest

from ate.textwidth import Cluster, cluster_width, clusters

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467\u200d\U0001F467"
TRANSGENDER_FLAG = "\U0001F3F3\ufe0f\u200d\u26a7\ufe0f"


@pytest.mark.parametrize("text, width", [
    ("a", 1),
    ("e\u0301", 1),  # e + combining acute
    ("\u5bbd", 2),
    (FAMILY, 2),
    (TRANSGENDER_FLAG, 2),
])
def test_cluster_width(text, width):
    (cluster,) = list(clusters(text))
    assert cluster.text == text
    assert cluster.width == width


def test_clusters_carry_byte_offsets():
    assert list(clusters("a\u00e9\u5bbd", 10)) == [
        Cluster("a", 10, 1),
        Cluster("\u00e9", 11, 1),
        Cluster("\u5bbd", 13, 2),
    ]


def test_control_has_no_width():
    assert cluster_width("\n") == 0

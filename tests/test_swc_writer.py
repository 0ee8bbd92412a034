"""
Tests for SWCFile, the SWC writer.
"""

import pytest

from swcmorph.io.swc_text import parse_points
from swcmorph.processing.pipeline import parse_swc
from swcmorph.structures.morphology import Morphology
from swcmorph.structures.swc import SWCFile


def _linkage(morphology):
    """Section shapes that do not depend on the section ids."""
    return sorted(
        (s.type_value, len(s.points), s.parent_id is None, len(s.children_ids)) for s in morphology.sections
    )


class TestAddPoint:
    """Tests for SWCFile.add_point."""

    def test_valid_points(self):
        swc = SWCFile("unused.swc")
        swc.add_point(1, 1, 0.0, 0.0, 0.0, 1.0, -1)
        swc.add_point(2, 2, 1.0, 0.0, 0.0, 1.0, 1)

        assert len(swc.data) == 2

    @pytest.mark.parametrize("identity, parent", [(0, -1), (2, 2), (2, 3), (3, 0), (3, -5)])
    def test_invalid_points(self, identity, parent):
        with pytest.raises(ValueError):
            SWCFile("unused.swc").add_point(identity, 2, 0.0, 0.0, 0.0, 1.0, parent)


class TestFromMorphology:
    """Tests for writing a morphology back as SWC."""

    @pytest.mark.parametrize("fixture_name", ["axon_chain", "axon_fork", "two_dendrites", "no_soma", "soma_only"])
    def test_reparse_gives_same_sections(self, request, fixture_name):
        morphology = parse_swc(request.getfixturevalue(fixture_name))

        text = SWCFile.from_morphology(morphology, "unused.swc").to_text()
        reparsed = parse_swc(text)

        assert reparsed.number_of_sections == morphology.number_of_sections
        assert _linkage(reparsed) == _linkage(morphology)
        assert (reparsed.soma is None) == (morphology.soma is None)

    def test_point_count(self, axon_fork):
        swc = SWCFile.from_morphology(parse_swc(axon_fork), "unused.swc")

        points = parse_points(swc.to_text())
        assert len(points) == 7
        assert points[0].parent_id == -1
        assert all(p.parent_id < p.id for p in points[1:])

    def test_orphans_without_soma_share_a_root(self):
        morphology = Morphology.from_raw(
            {
                "soma": None,
                "sections": [
                    {"id": 0, "typevalue": 3, "points": [{"position": [0, 0, 0], "radius": 0}, {"position": [1, 0, 0], "radius": 1}], "parent": None, "children": []},
                    {"id": 1, "typevalue": 3, "points": [{"position": [0, 0, 0], "radius": 0}, {"position": [-1, 0, 0], "radius": 1}], "parent": None, "children": []},
                ],
            }
        )

        points = parse_points(SWCFile.from_morphology(morphology, "unused.swc").to_text())

        assert [p.parent_id for p in points] == [-1, 1, 1]

    def test_write_file(self, tmp_path, axon_fork):
        path = tmp_path / "out.swc"
        swc = SWCFile.from_morphology(parse_swc(axon_fork), str(path))

        assert swc.write_file()
        content = path.read_text()
        assert content.startswith("#")
        assert parse_swc(content).number_of_sections == 3


class TestMalformedSectionTrees:
    """Tests for writing section trees that cannot come from a parse."""

    @staticmethod
    def _raw_section(section_id, parent, children, points):
        return {
            "id": section_id,
            "typevalue": 3,
            "points": [{"position": p, "radius": 1} for p in points],
            "parent": parent,
            "children": children,
        }

    def test_cycle_is_written_once(self, caplog):
        morphology = Morphology.from_raw(
            {
                "sections": [
                    self._raw_section(0, None, [1], [[0, 0, 0], [1, 0, 0]]),
                    self._raw_section(1, 0, [0], [[1, 0, 0], [2, 0, 0]]),
                ],
            }
        )

        swc = SWCFile.from_morphology(morphology, "unused.swc")

        assert [row[6] for row in sorted(swc.data)] == [-1, 1, 2]
        assert "reached twice" in caplog.text

    def test_children_of_empty_section(self):
        morphology = Morphology.from_raw(
            {
                "sections": [
                    self._raw_section(0, None, [1], [[0, 0, 0], [1, 0, 0]]),
                    self._raw_section(1, 0, [2], []),
                    self._raw_section(2, 1, [], [[1, 0, 0], [2, 0, 0]]),
                ],
            }
        )

        points = parse_points(SWCFile.from_morphology(morphology, "unused.swc").to_text())

        # section 2 grows from the last point of section 0
        assert [p.parent_id for p in points] == [-1, 1, 2]
        assert (points[2].x, points[2].y) == (2.0, 0.0)

"""Tests for chunk partitioning and mesh batching."""

import pytest
import numpy as np
from py_hexmap.core.chunking import Chunker
from py_hexmap.core.errors import GenerationOrderError
from py_hexmap.core.generator import HexMapGenerator, MapConfig
from py_hexmap.core.grid import HexGrid
from py_hexmap.core.hex_grid import GridSampler
from py_hexmap.core.mesh import TileMeshTemplate


class TestChunker:
    """Test chunk partitioning."""

    def test_chunk_counts(self):
        chunker = Chunker(25, 17, 10)
        assert chunker.chunks_x == 3
        assert chunker.chunks_z == 2
        assert len(chunker.chunks()) == 6

    def test_partial_chunks(self):
        chunker = Chunker(25, 17, 10)
        last_col = chunker.chunk(2, 0)
        assert last_col.cols == range(20, 25)
        assert last_col.tiles_x == 5
        last_row = chunker.chunk(0, 1)
        assert last_row.rows == range(10, 17)
        assert last_row.tiles_z == 7

    def test_coverage(self):
        """Every cell belongs to exactly one chunk."""
        chunker = Chunker(25, 17, 10)
        cells = [cell for chunk in chunker.chunks() for cell in chunk.cells()]
        assert len(cells) == 25 * 17
        assert set(cells) == {(c, r) for c in range(25) for r in range(17)}

    def test_exact_multiple(self):
        chunker = Chunker(20, 20, 10)
        assert (chunker.chunks_x, chunker.chunks_z) == (2, 2)
        assert all(chunk.tile_count == 100 for chunk in chunker.chunks())

    def test_chunk_larger_than_map(self):
        chunker = Chunker(3, 2, 16)
        chunks = chunker.chunks()
        assert len(chunks) == 1
        assert chunks[0].tile_count == 6

    def test_chunk_lookup(self):
        chunker = Chunker(25, 17, 10)
        chunk = chunker.chunk(2, 1)
        assert (chunk.cols, chunk.rows) == (range(20, 25), range(10, 17))
        assert chunker.chunk(3, 0) is None

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Chunker(10, 10, 0)


class TestChunkMesh:
    """Test merged chunk geometry."""

    @pytest.fixture
    def template(self):
        return TileMeshTemplate.hex_prism(cell_size=1.0, height=0.5)

    @pytest.fixture
    def grid(self, template):
        generator = HexMapGenerator(MapConfig(width=5, height=4, chunk_size=3), template=template)
        grid, _ = generator.populate()
        return grid

    def test_parallel_arrays(self, grid, template):
        chunker = Chunker(5, 4, 3)
        chunk = chunker.chunk(0, 0)
        mesh = chunker.build_mesh(chunk, grid, template)

        n = chunk.tile_count
        vc = template.vertex_count
        assert mesh.vertices.shape == (n * vc, 3)
        assert mesh.normals.shape == (n * vc, 3)
        assert mesh.uvs.shape == (n * vc, 2)
        assert mesh.colors.shape == (n * vc, 4)
        assert mesh.triangles.shape == (n * len(template.triangles), 3)

    def test_triangle_offsets_are_chunk_local(self, grid, template):
        chunker = Chunker(5, 4, 3)
        mesh = chunker.build_mesh(chunker.chunk(1, 1), grid, template)

        vc = template.vertex_count
        tc = len(template.triangles)
        assert mesh.triangles.min() == 0
        assert mesh.triangles.max() == mesh.vertex_count - 1
        np.testing.assert_array_equal(mesh.triangles[tc:2 * tc], template.triangles + vc)

    def test_vertices_translated_and_colored(self, grid, template):
        chunker = Chunker(5, 4, 3)
        chunk = chunker.chunk(1, 0)
        mesh = chunker.build_mesh(chunk, grid, template)

        vc = template.vertex_count
        for i, (col, row) in enumerate(chunk.cells()):
            tile = grid.tile_at(col, row)
            block = slice(i * vc, (i + 1) * vc)
            np.testing.assert_allclose(
                mesh.vertices[block], template.vertices + np.array(tile.position), atol=1e-5
            )
            np.testing.assert_allclose(
                mesh.colors[block], np.tile(tile.color, (vc, 1)), atol=1e-6
            )

    def test_build_meshes(self, grid, template):
        meshes = Chunker(5, 4, 3).build_meshes(grid, template)
        assert len(meshes) == 4
        assert sum(m.vertex_count for m in meshes) == 20 * template.vertex_count

    def test_unpopulated_grid(self, template):
        grid = HexGrid(GridSampler(5, 4, 1.0))
        chunker = Chunker(5, 4, 3)
        with pytest.raises(GenerationOrderError):
            chunker.build_meshes(grid, template)
        with pytest.raises(GenerationOrderError):
            chunker.build_mesh(chunker.chunk(0, 0), grid, template)


class TestTileMeshTemplate:
    """Test the default hex prism and template validation."""

    def test_hex_prism_width(self):
        template = TileMeshTemplate.hex_prism(cell_size=2.0, height=1.5, top=1.5)
        size = template.bounds_size
        assert size[0] == pytest.approx(2.0, abs=1e-5)
        assert size[1] == pytest.approx(1.5)
        assert template.top_surface_offset == 1.5
        assert template.vertices[:, 1].min() == pytest.approx(0.0)

    def test_hex_prism_top_at_origin(self):
        template = TileMeshTemplate.hex_prism(height=2.0)
        assert template.top_surface_offset == 0.0
        assert template.vertices[:, 1].max() == pytest.approx(0.0)
        assert template.vertices[:, 1].min() == pytest.approx(-2.0)

    def test_hex_prism_counts(self):
        template = TileMeshTemplate.hex_prism()
        assert template.vertex_count == 7 + 6 * 4
        assert len(template.triangles) == 6 + 6 * 2

    def test_parallel_validation(self):
        with pytest.raises(ValueError):
            TileMeshTemplate(
                vertices=np.zeros((3, 3)), normals=np.zeros((2, 3)),
                uvs=np.zeros((3, 2)), triangles=[[0, 1, 2]],
            )

    def test_index_validation(self):
        with pytest.raises(ValueError):
            TileMeshTemplate(
                vertices=np.zeros((3, 3)), normals=np.zeros((3, 3)),
                uvs=np.zeros((3, 2)), triangles=[[0, 1, 3]],
            )

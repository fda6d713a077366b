"""
Tests for the Command-Line Driver

Run with: pytest tests/test_main.py -v
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kdtree2d.main import main, create_parser


@pytest.fixture
def point_file(tmp_path):
    path = tmp_path / "points.txt"
    path.write_text("0.2 0.3\n0.4 0.7\n0.9 0.1\n")
    return path


class TestMain:

    def test_range_and_nearest_from_file(self, point_file, capsys):
        code = main([
            "--input", str(point_file),
            "--range", "0", "0", "0.5", "0.5",
            "--nearest", "0.5", "0.5",
            "--verbose"
        ])
        out = capsys.readouterr().out

        assert code == 0
        assert "Size:       3" in out
        assert "Points found:  1" in out
        assert "(0.2, 0.3)" in out
        assert "Nearest point: (0.4, 0.7)" in out
        assert out.count("Brute force agrees: True") == 2

    def test_generated_points(self, capsys):
        code = main(["--generate", "200", "--seed", "3", "--nearest", "0.1", "0.9", "--quiet"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Brute force agrees: True" in out

    def test_save_points(self, tmp_path, capsys):
        out_path = tmp_path / "saved.txt"
        assert main(["--generate", "10", "--save-points", str(out_path), "--quiet"]) == 0
        assert len(out_path.read_text().splitlines()) == 10

    def test_missing_input_file(self, tmp_path, capsys):
        code = main(["--input", str(tmp_path / "nope.txt")])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_inverted_range_rejected(self, point_file, capsys):
        code = main(["--input", str(point_file), "--range", "0.5", "0.5", "0.1", "0.1"])
        assert code == 1
        assert "xmin" in capsys.readouterr().err

    def test_empty_input_nearest(self, tmp_path, capsys):
        path = tmp_path / "empty.txt"
        path.write_text("# nothing here\n")
        assert main(["--input", str(path), "--nearest", "0.5", "0.5"]) == 0
        assert "no nearest point" in capsys.readouterr().out

    def test_benchmark(self, tmp_path, capsys):
        csv_path = tmp_path / "bench.csv"
        code = main([
            "--benchmark", "--sizes", "100,300", "--queries", "5",
            "--trials", "1", "--save-benchmark", str(csv_path)
        ])
        out = capsys.readouterr().out

        assert code == 0
        assert "BENCHMARK SUMMARY" in out
        assert csv_path.read_text().startswith("num_points,height")

    def test_parser_rejects_conflicting_sources(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--input", "a.txt", "--generate", "5"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

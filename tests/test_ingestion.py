"""tests/test_ingestion.py"""
from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests
from megasena_stats.ingestion.csv_parser import load_csv_source, normalize_date, parse_csv


TODAY = date(2026, 1, 1)

SAMPLE = """Concurso;Data;N1;N2;N3;N4;N5;N6
2800;25/01/2025;04;12;23;34;45;58
2799;22/01/2025;07;15;28;39;42;55
2798;18/01/2025;03;11;22;33;44;59"""


class TestParseCsv:
    def test_full_rows(self):
        draws = parse_csv(SAMPLE, today=TODAY)
        assert len(draws) == 3
        first = draws[0]
        assert first.draw_number == 2800
        assert first.draw_date == date(2025, 1, 25)
        assert first.numbers == (4, 12, 23, 34, 45, 58)

    def test_bare_number_rows_get_line_number_and_today(self):
        draws = parse_csv("Concurso,N1,N2,N3,N4,N5,N6\n58,45,34,23,12,4", today=TODAY)
        assert len(draws) == 1
        assert draws[0].draw_number == 2
        assert draws[0].draw_date == TODAY
        assert draws[0].numbers == (4, 12, 23, 34, 45, 58)

    def test_mixed_separators(self):
        text = "10\t2024-12-31\t1\t2\t3\t4\t5\t6\n11,31-12-2024,7,8,9,10,11,12"
        draws = parse_csv(text, today=TODAY)
        assert [d.draw_date for d in draws] == [date(2024, 12, 31), date(2024, 12, 31)]

    def test_bad_rows_dropped(self):
        text = "\n".join([
            "2801;26/01/2025;04;12;23;34;45;61",   # out of range
            "2802;27/01/2025;04;04;23;34;45;50",   # duplicate
            "abc;27/01/2025;04;05;23;34;45;50",    # no draw number
            "1;2;3;4;5",                           # too short
            "",
            "2803;28/01/2025;04;05;23;34;45;50",
        ])
        draws = parse_csv(text, today=TODAY)
        assert [d.draw_number for d in draws] == [2803]

    def test_header_words_case_insensitive(self):
        text = "CONCURSO;DATA\nnumbers data 1;2;3;4;5;6\n1;2;3;4;5;6"
        draws = parse_csv(text, today=TODAY)
        assert len(draws) == 1

    def test_empty_text(self):
        assert parse_csv("", today=TODAY) == []


class TestNormalizeDate:
    @pytest.mark.parametrize("text,expected", [
        ("25/01/2025", date(2025, 1, 25)),
        ("2025-01-25", date(2025, 1, 25)),
        ("25-01-2025", date(2025, 1, 25)),
        ("Jan 25th", TODAY),
        ("31/02/2024", TODAY),
        ("", TODAY),
    ])
    def test_formats(self, text, expected):
        assert normalize_date(text, today=TODAY) == expected


class TestLoadCsvSource:
    def test_reads_local_file(self, tmp_path):
        path = tmp_path / "draws.csv"
        path.write_text(SAMPLE, encoding="utf-8")
        assert load_csv_source(str(path)) == SAMPLE

    @patch("megasena_stats.ingestion.csv_parser.requests.get")
    def test_downloads_url(self, mock_get):
        resp = MagicMock()
        resp.text = SAMPLE
        mock_get.return_value = resp
        assert load_csv_source("https://example.com/draws.csv") == SAMPLE

    @patch("megasena_stats.ingestion.csv_parser.time.sleep")
    @patch("megasena_stats.ingestion.csv_parser.requests.get")
    def test_download_failure_raises(self, mock_get, mock_sleep):
        mock_get.side_effect = requests.ConnectionError("boom")
        with pytest.raises(RuntimeError):
            load_csv_source("https://example.com/draws.csv")
        assert mock_get.call_count == 3

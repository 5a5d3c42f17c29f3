"""
Tests for the command line interface.
"""

import json

from pypdf import PdfReader
import pdf_booklet


class TestMain:
    """Tests for pdf_booklet.main."""

    def test_generate(self, make_pdf, output_path, capsys):
        """Test a complete run from the command line."""
        exit_code = pdf_booklet.main([str(make_pdf(6)), str(output_path), '--dpi', '20'])

        assert exit_code == 0
        assert len(PdfReader(str(output_path)).pages) == 4
        out = capsys.readouterr().out
        assert "Booklet generation complete!" in out
        assert "Sheets: 2 (4 pages)" in out

    def test_dry_run(self, make_pdf, output_path, capsys):
        """Test that a dry run prints the layout and writes nothing."""
        exit_code = pdf_booklet.main([str(make_pdf(4)), str(output_path), '--dry-run'])

        assert exit_code == 0
        assert not output_path.exists()
        lines = capsys.readouterr().out.splitlines()
        assert "4 source pages, 1 sheet(s)" in lines[0]
        layout = [line.split() for line in lines if line.strip().startswith("Sheet")]
        assert [(words[2], words[3], words[5]) for words in layout] == [
            ('front', 'top', '4'),
            ('front', 'bottom', '1'),
            ('back', 'top', '2'),
            ('back', 'bottom', '3'),
        ]

    def test_invalid_signature_size(self, make_pdf, output_path):
        """Test that an invalid signature size fails before any work."""
        assert pdf_booklet.main([str(make_pdf(4)), str(output_path), '--sheets', '0']) == 1
        assert not output_path.exists()

    def test_inverted_range(self, make_pdf, output_path):
        """Test that an inverted page range is rejected."""
        args = [str(make_pdf(8)), str(output_path), '--first-page', '6', '--last-page', '2']

        assert pdf_booklet.main(args) == 1

    def test_missing_source(self, tmp_path, output_path):
        """Test that a missing source exits with an error."""
        assert pdf_booklet.main([str(tmp_path / "missing.pdf"), str(output_path)]) == 1
        assert not output_path.exists()

    def test_config_defaults_and_overrides(self, make_pdf, output_path, tmp_path, capsys):
        """Test that config file defaults apply and command line options override them."""
        config_path = tmp_path / "booklet.json"
        config_path.write_text(json.dumps({'sheets_per_signature': 2, 'page_size': 'a4'}))

        args = [str(make_pdf(8)), str(output_path), '--config', str(config_path),
                '--page-size', 'letter', '--dry-run']
        assert pdf_booklet.main(args) == 0

        out = capsys.readouterr().out
        assert "8 source pages, 2 sheet(s)" in out

    def test_save_config(self, make_pdf, output_path, tmp_path):
        """Test saving the effective options."""
        config_path = tmp_path / "saved.json"
        args = [str(make_pdf(4)), str(output_path), '--config', str(config_path),
                '--save-config', '--sheets', '3', '--color', '--dry-run']

        assert pdf_booklet.main(args) == 0

        data = json.loads(config_path.read_text())
        assert data['sheets_per_signature'] == 3
        assert data['color_mode'] == 'color'

    def test_save_config_requires_path(self, make_pdf, output_path):
        """Test that --save-config without --config is a usage error."""
        assert pdf_booklet.main([str(make_pdf(4)), str(output_path), '--save-config']) == 2

    def test_dry_run_rejects_empty_selection(self, make_pdf, output_path, capsys):
        """Test that a dry run validates the options like a real run does."""
        args = [str(make_pdf(4)), str(output_path), '--first-page', '9', '--dry-run']

        assert pdf_booklet.main(args) == 1
        assert "Sheet" not in capsys.readouterr().out

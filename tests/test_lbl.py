import io

from pypdf import PdfReader

from shipcrop.lbl import main


def test_list(capsys):
    assert main(["--list"]) == 0
    out = capsys.readouterr().out
    assert "FLIPKART" in out
    assert "variant with_invoice" in out
    assert "option  order_page" in out


def test_crop_file(tmp_path, pdf_factory):
    source = tmp_path / "in.pdf"
    source.write_bytes(pdf_factory(["a", "b"]))
    target = tmp_path / "out.pdf"
    assert main([str(source), "-o", str(target), "--platform", "FLIPKART"]) == 0
    reader = PdfReader(io.BytesIO(target.read_bytes()))
    assert len(reader.pages) == 2
    assert float(reader.pages[0].mediabox.width) == 219.0


def test_unknown_variant(tmp_path, pdf_factory, capsys):
    source = tmp_path / "in.pdf"
    source.write_bytes(pdf_factory(["a"]))
    target = tmp_path / "out.pdf"
    code = main([str(source), "-o", str(target), "--platform", "MEESHO", "--variant", "big"])
    assert code == 1
    assert not target.exists()
    assert "Label run failed" in capsys.readouterr().out


def test_missing_output(tmp_path, pdf_factory):
    source = tmp_path / "in.pdf"
    source.write_bytes(pdf_factory(["a"]))
    assert main([str(source)]) == 1


def test_config_not_an_object(tmp_path, capsys):
    config = tmp_path / "labels.json"
    config.write_text("[1, 2]")
    assert main(["--list", "--config", str(config)]) == 1
    assert "Could not read config" in capsys.readouterr().out

"""
Integration tests for the xml_transformer command-line interface.
"""

import io
import json
from pathlib import Path

import pytest

from xml_transformer.cli import main
from xml_transformer.config.config_manager import reset_config_manager


SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    for name in ('XML_TRANSFORMER_KEYS', 'XML_TRANSFORMER_CONFIG_FILE',
                 'XML_TRANSFORMER_KEYS_DELIMITER_REGEX', 'XML_TRANSFORMER_XML_MAP_KEY'):
        monkeypatch.delenv(name, raising=False)
    reset_config_manager()
    yield
    reset_config_manager()


def read_lines(text):
    return [json.loads(line) for line in text.splitlines() if line]


class TestCli:
    
    def test_converts_file_with_command_line_keys(self, capsys):
        exit_code = main([
            str(SAMPLES_DIR / "customers.xml"),
            "--keys", "Customers.Customer.ContactName<ContactName>",
            "--keys", "Customers.Customer.ContactTitle<ContactTitle><Owner>",
            "--delimiter", "\\.",
            "--xml-map-key", "blob"
        ])
        
        assert exit_code == 0
        [output] = read_lines(capsys.readouterr().out)
        assert output["ContactName"] == ["Maria Anders", "Ana Trujillo", "Antonio Moreno"]
        assert output["ContactTitle"] == ["Owner"]
        assert output["blob"].startswith("<?xml")
        assert "created" in output
    
    def test_converts_with_yaml_config(self, capsys):
        exit_code = main([str(SAMPLES_DIR / "customers.xml"),
                          "--config", str(SAMPLES_DIR / "transform_config.yaml")])
        
        assert exit_code == 0
        [output] = read_lines(capsys.readouterr().out)
        assert output["ContactTitle"] == ["Sales Representative", "Owner"]
        assert output["PhoneSuffix"] == ["0074321", "4729", "3932"]
        assert "blob" in output
    
    def test_command_line_overrides_config_file(self, capsys):
        exit_code = main([str(SAMPLES_DIR / "customers.xml"),
                          "--config", str(SAMPLES_DIR / "transform_config.yaml"),
                          "--xml-map-key", "raw"])
        
        assert exit_code == 0
        [output] = read_lines(capsys.readouterr().out)
        assert "raw" in output and "blob" not in output
    
    def test_failed_document_does_not_stop_batch(self, tmp_path, capsys):
        good = tmp_path / "good.xml"
        good.write_text("<a><b>1</b></a>", encoding='utf-8')
        bad = tmp_path / "bad.xml"
        bad.write_text("<unclosed>", encoding='utf-8')
        
        exit_code = main([str(bad), str(good), "--keys", "a.b<b>", "--delimiter", "\\."])
        
        assert exit_code == 1
        outputs = read_lines(capsys.readouterr().out)
        assert [output["b"] for output in outputs] == ["1"]
    
    def test_writes_output_file(self, tmp_path):
        target = tmp_path / "out.jsonl"
        
        exit_code = main([str(SAMPLES_DIR / "customers.xml"), "--keys", "Customers.Customer.CustomerID<Ids>",
                          "--delimiter", "\\.", "--output", str(target)])
        
        assert exit_code == 0
        [output] = read_lines(target.read_text(encoding='utf-8'))
        assert output["Ids"] == ["ALFKI", "ANATR", "ANTON"]
    
    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("<a><b>x</b></a>"))
        
        exit_code = main(["--keys", "a.b", "--delimiter", "\\."])
        
        assert exit_code == 0
        [output] = read_lines(capsys.readouterr().out)
        assert output["a.b"] == "x"
    
    def test_environment_configuration(self, monkeypatch, capsys):
        monkeypatch.setenv('XML_TRANSFORMER_KEYS', 'a.b<B>')
        monkeypatch.setenv('XML_TRANSFORMER_KEYS_DELIMITER_REGEX', '\\.')
        monkeypatch.setattr("sys.stdin", io.StringIO("<a><b>x</b></a>"))
        
        assert main([]) == 0
        [output] = read_lines(capsys.readouterr().out)
        assert output["B"] == "x"
    
    def test_missing_keys_fails(self, capsys):
        assert main([str(SAMPLES_DIR / "customers.xml")]) == 1
        assert capsys.readouterr().out == ""
    
    def test_missing_file_fails(self, tmp_path):
        assert main([str(tmp_path / "nope.xml"), "--keys", "a"]) == 1
    
    def test_unreadable_file_does_not_stop_batch(self, tmp_path, capsys):
        good = tmp_path / "good.xml"
        good.write_text("<a><b>1</b></a>", encoding='utf-8')
        latin = tmp_path / "latin.xml"
        latin.write_bytes("<a><b>café</b></a>".encode('latin-1'))
        
        exit_code = main([str(tmp_path / "nope.xml"), str(latin), str(good),
                          "--keys", "a.b<b>", "--delimiter", "\\."])
        
        assert exit_code == 1
        outputs = read_lines(capsys.readouterr().out)
        assert [output["b"] for output in outputs] == ["1"]

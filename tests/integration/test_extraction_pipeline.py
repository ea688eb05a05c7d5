"""
Integration tests for the extraction pipeline: XML payload in, output map out.

These run the real lxml parser, path expression parser, navigator and
post-processor together.
"""

import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from xml_transformer.exceptions import ConfigurationError, XMLParsingError
from xml_transformer.mapping.extraction_pipeline import ExtractionPipeline, transform


SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"
CREATED_FORMAT = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")

CUSTOMER_XML = (
    "<Customers><Customer><ContactName>Maria</ContactName><ContactName>Anna</ContactName>"
    "<ContactTitle>Owner</ContactTitle></Customer></Customers>"
)


@pytest.fixture
def customers_xml():
    return (SAMPLES_DIR / "customers.xml").read_text(encoding='utf-8')


class TestCustomerScenarios:
    """End-to-end scenarios on a small customer document."""
    
    def test_aliased_paths(self):
        output = transform(
            CUSTOMER_XML,
            ["Customers.Customer.ContactName<ContactName>", "Customers.Customer.ContactTitle<ContactTitle>"],
            "\\.",
            "blob"
        )
        
        assert set(output) == {"ContactName", "ContactTitle", "blob", "created"}
        assert output["ContactName"] == ["Maria", "Anna"]
        assert output["ContactTitle"] == "Owner"
        assert output["blob"] == CUSTOMER_XML
        assert CREATED_FORMAT.match(output["created"])
    
    def test_path_without_alias_is_its_own_key(self):
        output = transform(CUSTOMER_XML, ["Customers.Customer.ContactName"], "\\.", "blob")
        
        assert output["Customers.Customer.ContactName"] == ["Maria", "Anna"]
    
    def test_malformed_xml_raises(self):
        with pytest.raises(XMLParsingError):
            transform("<unclosed>", ["Customers.Customer.ContactName"], "\\.", "blob")
    
    def test_malformed_xml_is_a_value_error(self):
        with pytest.raises(ValueError):
            transform("<a><b></a>", ["a.b"], "\\.", "blob")


class TestExtractionPipeline:
    """Pipeline behaviour on the sample customers file."""
    
    def test_prolog_is_stripped_but_payload_kept_verbatim(self, customers_xml):
        pipeline = ExtractionPipeline(["Customers.Customer.CompanyName<Companies>"], "\\.", "blob")
        
        output = pipeline.transform(customers_xml)
        
        assert customers_xml.startswith("<?xml")
        assert output["blob"] == customers_xml
        assert output["Companies"][0] == "Alfreds Futterkiste"
    
    def test_attributes_are_addressable(self, customers_xml):
        output = ExtractionPipeline(["Customers.Customer.CustomerID<Ids>"], "\\.").transform(customers_xml)
        
        assert output["Ids"] == ["ALFKI", "ANATR", "ANTON"]
    
    def test_filter_keeps_whole_matches_deduplicated(self, customers_xml):
        pipeline = ExtractionPipeline(["Customers.Customer.ContactTitle<Titles><Owner>"], "\\.")
        
        assert pipeline.transform(customers_xml)["Titles"] == ["Owner"]
    
    def test_filter_does_not_match_substrings(self, customers_xml):
        pipeline = ExtractionPipeline(["Customers.Customer.ContactTitle<Titles><Sales>"], "\\.")
        
        assert pipeline.transform(customers_xml)["Titles"] == []
    
    def test_extract_returns_first_match(self, customers_xml):
        pipeline = ExtractionPipeline(["Customers.Customer.Phone<PhoneSuffix><.*><\\d+$>"], "\\.")
        
        assert pipeline.transform(customers_xml)["PhoneSuffix"] == ["0074321", "4729", "3932"]
    
    def test_missing_path_gives_empty_dict(self, customers_xml):
        pipeline = ExtractionPipeline(["Suppliers.Supplier<Suppliers>", "Customers.Region"], "\\.")
        
        output = pipeline.transform(customers_xml)
        
        assert output["Suppliers"] == {}
        assert output["Customers.Region"] == {}
    
    def test_last_expression_wins_for_shared_output_id(self, customers_xml):
        pipeline = ExtractionPipeline(
            ["Customers.Customer.ContactName<Contact>", "Customers.Customer.ContactTitle<Contact>"],
            "\\."
        )
        
        output = pipeline.transform(customers_xml)
        
        assert output["Contact"] == ["Sales Representative", "Owner", "Owner"]
        assert len(output) == 3
    
    def test_default_payload_key(self):
        output = ExtractionPipeline(["a"], "\\.").transform("<a>1</a>")
        
        assert output["_xml_data_"] == "<a>1</a>"
        assert output["a"] == "1"
    
    def test_internal_entity_text_is_extracted(self):
        xml = '<!DOCTYPE r [<!ENTITY co "Acme">]><r><n>&co; Ltd</n></r>'

        assert transform(xml, ["r.n<n>"], "\\.", "blob")["n"] == "Acme Ltd"

    def test_unescaped_dot_delimiter_returns_whole_tree(self):
        output = ExtractionPipeline(["a.b<all>"]).transform("<a><b>1</b></a>")
        
        assert output["all"] == {"a": {"b": "1"}}
    
    def test_repeated_runs_differ_only_in_created(self, customers_xml):
        pipeline = ExtractionPipeline(
            ["Customers.Customer.ContactName<Names>", "Customers.Customer.Phone<P><.*><\\d+$>"],
            "\\."
        )
        
        first = pipeline.transform(customers_xml)
        second = pipeline.transform(customers_xml)
        first.pop("created")
        second.pop("created")
        
        assert first == second
    
    def test_output_maps_are_independent(self):
        pipeline = ExtractionPipeline(["missing<m>"], "\\.")
        
        first = pipeline.transform("<a>1</a>")
        first["m"]["touched"] = True
        
        assert pipeline.transform("<a>1</a>")["m"] == {}
    
    @pytest.mark.parametrize("payload", [None, b"<a/>", 12, {"a": "1"}])
    def test_non_string_payload_raises(self, payload):
        with pytest.raises(XMLParsingError):
            ExtractionPipeline(["a"], "\\.").transform(payload)
    
    def test_parser_failures_are_wrapped(self):
        class BrokenParser:
            def parse_to_tree(self, xml_content):
                raise RuntimeError("parser exploded")
        
        pipeline = ExtractionPipeline(["a"], "\\.", parser=BrokenParser())
        
        with pytest.raises(XMLParsingError, match="parser exploded"):
            pipeline.transform("<a/>")
    
    def test_invalid_delimiter(self):
        with pytest.raises(ConfigurationError):
            ExtractionPipeline(["a"], "(")
    
    def test_concurrent_transforms(self):
        pipeline = ExtractionPipeline(["r.v<v>", "r.item.id<ids><\\d+>"], "\\.")
        documents = [
            f"<r><v>{n}</v><item><id>{n}</id></item><item><id>x</id></item></r>"
            for n in range(50)
        ]
        
        with ThreadPoolExecutor(max_workers=8) as executor:
            outputs = list(executor.map(pipeline.transform, documents))
        
        for n, output in enumerate(outputs):
            assert output["v"] == str(n)
            assert output["ids"] == [str(n)]

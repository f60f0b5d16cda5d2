"""
Variable Resolution Tests
=========================
Dictionary construction and placeholder substitution.
"""

from datetime import date

import pytest

from hrcontracts.services.text_extractor import to_paragraphs
from hrcontracts.services.variable_resolver import (
    build_dictionary,
    format_date,
    key_variants,
    substitute,
)


class TestSubstitute:
    """Test suite for placeholder substitution."""

    def test_all_naming_conventions_replaced(self):
        text = "{{firstName}} / {{firstname}} / {{first_name}}"
        result = substitute(text, {"firstName": "Jane"})

        assert result.text == "Jane / Jane / Jane"
        assert result.replacements == 3

    def test_matching_is_case_insensitive(self):
        result = substitute("{{FIRSTNAME}} {{First_Name}}", {"firstName": "Jane"})
        assert result.text == "Jane Jane"

    def test_every_occurrence_replaced(self):
        text = "{{companyName}} " * 5
        result = substitute(text, {"companyName": "Acme Ltd"})
        assert result.text == "Acme Ltd " * 5

    def test_scenario_sentence(self):
        text = "Dear {{firstName}} {{lastName}}, you start on {{startDate}} at {{companyName}}."
        dictionary = {
            "firstName": "Jane",
            "lastName": "Doe",
            "startDate": "01/06/2024",
            "companyName": "Acme Ltd",
        }

        assert substitute(text, dictionary).text == "Dear Jane Doe, you start on 01/06/2024 at Acme Ltd."

    def test_unmatched_placeholder_preserved(self):
        result = substitute("Hello {{firstName}}, ref {{unknownField}}", {"firstName": "Jane"})

        assert result.text == "Hello Jane, ref {{unknownField}}"
        assert result.unresolved == ["unknownField"]

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_values_become_empty(self, value):
        result = substitute("[{{address}}]", {"address": value})

        assert result.text == "[]"
        for word in ("None", "null", "undefined"):
            assert word not in result.text

    def test_inserted_values_are_not_substituted_again(self):
        result = substitute("{{a}}", {"a": "{{b}}", "b": "boom"})
        assert result.text == "{{b}}"

    def test_bad_keys_are_skipped_without_aborting(self):
        dictionary = {"bad{key}": "x", "": "y", 42: "z", "lastName": "Doe"}
        result = substitute("{{lastName}}", dictionary)

        assert result.text == "Doe"
        assert len(result.skipped_keys) == 3

    def test_regex_metacharacters_in_keys(self):
        result = substitute("{{a.b*c}} {{a+b}}", {"a.b*c": "one", "a+b": "two"})
        assert result.text == "one two"

    def test_first_key_wins_on_colliding_spellings(self):
        result = substitute("{{startdate}}", {"startDate": "first", "startdate": "second"})
        assert result.text == "first"

    def test_escaped_values_survive_markup_stripping(self):
        result = substitute("<p>{{companyName}}</p>", {"companyName": "Smith & Sons <UK> &lt;Ltd&gt;"},
                            escape_values=True)

        assert result.text == "<p>Smith &amp; Sons &lt;UK&gt; &amp;lt;Ltd&amp;gt;</p>"
        assert to_paragraphs(result.text) == ["Smith & Sons <UK> &lt;Ltd&gt;"]

    def test_values_are_not_escaped_by_default(self):
        assert substitute("{{a}}", {"a": "R&D"}).text == "R&D"

    def test_placeholders_inside_markup(self):
        result = substitute("<p>Dear <strong>{{firstName}}</strong></p>", {"firstName": "Jane"})
        assert result.text == "<p>Dear <strong>Jane</strong></p>"

    def test_key_variants(self):
        assert key_variants("nationalInsuranceNumber") == [
            "nationalInsuranceNumber",
            "nationalinsurancenumber",
            "national_insurance_number",
        ]
        assert key_variants("Email")[2] == "email"


class TestBuildDictionary:
    """Test suite for the variable dictionary."""

    def test_flattens_records(self, employee, company):
        dictionary = build_dictionary(employee, employee.employment, company, today=date(2025, 1, 2))

        assert dictionary["firstName"] == "Jane"
        assert dictionary["fullName"] == "Jane Doe"
        assert dictionary["jobTitle"] == "Engineer"
        assert dictionary["startDate"] == "01/06/2024"
        assert dictionary["dateOfBirth"] == "15/03/1990"
        assert dictionary["benefits"] == "Pension, Health insurance"
        assert dictionary["companyName"] == "Acme Ltd"
        assert dictionary["currentDate"] == "02/01/2025"
        assert dictionary["currentYear"] == "2025"

    def test_absent_values_are_empty_strings(self):
        dictionary = build_dictionary({"first_name": "Jane"}, None, None)

        assert dictionary["phone"] == ""
        assert dictionary["endDate"] == ""
        assert dictionary["benefits"] == ""
        assert dictionary["companyName"] == ""
        assert all(isinstance(v, str) for v in dictionary.values())
        assert not any(v in ("None", "null", "undefined") for v in dictionary.values())

    def test_employment_defaults(self):
        dictionary = build_dictionary({"first_name": "Jane"}, {}, {})

        assert dictionary["manager"] == "Management"
        assert dictionary["baseSalary"] == "0"
        assert dictionary["status"] == "active"

    def test_mapping_records_accept_camel_case(self):
        dictionary = build_dictionary(
            {"firstName": "Jane", "lastName": "Doe"},
            {"jobTitle": "Analyst", "startDate": "2024-06-01"},
            {"name": "Acme Ltd"},
        )

        assert dictionary["fullName"] == "Jane Doe"
        assert dictionary["jobTitle"] == "Analyst"
        assert dictionary["startDate"] == "01/06/2024"

    def test_format_date(self):
        assert format_date(date(2024, 12, 25)) == "25/12/2024"
        assert format_date(None) == ""
        assert format_date("not a date") == "not a date"

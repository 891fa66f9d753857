import json
import unittest

from numencoach.ai.response_parser import (
    ReadingParseError,
    parse_llm_response,
    parse_reading,
    word_count,
)


def reading(**overrides):
    data = {
        "summary": "Aapka Moon strong hai",
        "details": "Roz subah meditation karein",
        "confidence": "high",
        "basis": "Moon Nakshatra + chart analysis",
        "cta": "Full report available hai",
        "disclaimer": "Guidance hai, professional advice nahin",
    }
    data.update(overrides)
    return data


class TestParseLLMResponse(unittest.TestCase):
    def test_cleans_whitespace(self):
        result = parse_llm_response("  Namaste\n\n\n\nAap achhe hain  ")
        self.assertEqual(result["text"], "Namaste\n\nAap achhe hain")

    def test_infers_confidence(self):
        self.assertEqual(parse_llm_response("This strongly favours you")["confidence"], "high")
        self.assertEqual(parse_llm_response("It is very likely")["confidence"], "high")
        self.assertEqual(parse_llm_response("This suggests growth")["confidence"], "medium")
        self.assertEqual(parse_llm_response("You might travel")["confidence"], "low")
        self.assertEqual(parse_llm_response("Namaste")["confidence"], "medium")

    def test_never_raises(self):
        self.assertEqual(parse_llm_response(None), {"text": "", "confidence": "medium"})


class TestParseReading(unittest.TestCase):
    def test_extracts_json_from_surrounding_text(self):
        raw = "Here you go:\n" + json.dumps(reading()) + "\nDhanyavaad"
        self.assertEqual(parse_reading(raw, word_limit=50), reading())

    def test_long_reading_truncates_details(self):
        details = " ".join(f"w{i}" for i in range(1, 21))
        parsed = parse_reading(json.dumps(reading(details=details)), word_limit=10)

        self.assertEqual(parsed["details"], " ".join(f"w{i}" for i in range(1, 16)) + "...")
        self.assertEqual(parsed["summary"], reading()["summary"])

    def test_within_limit_is_untouched(self):
        parsed = parse_reading(json.dumps(reading()), word_limit=100)
        self.assertLessEqual(word_count(parsed), 100)
        self.assertEqual(parsed["details"], reading()["details"])

    def test_unknown_confidence_becomes_medium(self):
        parsed = parse_reading(json.dumps(reading(confidence="very sure")), word_limit=50)
        self.assertEqual(parsed["confidence"], "medium")

    def test_missing_or_empty_field(self):
        data = reading()
        del data["cta"]
        with self.assertRaises(ReadingParseError):
            parse_reading(json.dumps(data), word_limit=50)

        with self.assertRaises(ReadingParseError):
            parse_reading(json.dumps(reading(basis="")), word_limit=50)

    def test_no_json(self):
        for raw in ("Sorry, no reading today", "", None, "[1, 2]"):
            with self.assertRaises(ReadingParseError):
                parse_reading(raw, word_limit=50)

    def test_invalid_json(self):
        with self.assertRaises(ReadingParseError):
            parse_reading("{summary: broken}", word_limit=50)

    def test_parse_error_is_a_value_error(self):
        self.assertTrue(issubclass(ReadingParseError, ValueError))


if __name__ == "__main__":
    unittest.main()

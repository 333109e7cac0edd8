"""Unit tests for inputs and prices modules."""

import unittest
import sys
import os
import json
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from solar_calc.inputs import (
    SystemSpec, parse_size, format_size_input, validate_request, load_inputs,
    STATE_REQUIRED_MSG, SIZE_REQUIRED_MSG,
)
from solar_calc.prices import (
    ELECTRICITY_PRICES, DEFAULT_PRICE_PER_KWH, get_price, state_options,
)


class TestSizeParsing(unittest.TestCase):
    """Test system size entry handling."""

    def test_parse_size(self):
        self.assertEqual(parse_size("5.00"), 5.0)
        self.assertEqual(parse_size(" 12.5 "), 12.5)
        self.assertEqual(parse_size(7), 7.0)
        self.assertEqual(parse_size(""), 0.0)
        self.assertEqual(parse_size("."), 0.0)
        self.assertEqual(parse_size("abc"), 0.0)
        self.assertEqual(parse_size("nan"), 0.0)
        self.assertEqual(parse_size(None), 0.0)

    def test_parse_size_reads_leading_number(self):
        """Trailing text after the number is ignored."""
        self.assertEqual(parse_size("12kW"), 12.0)
        self.assertEqual(parse_size("3.5 kW-DC"), 3.5)
        self.assertEqual(parse_size("1e2"), 100.0)
        self.assertEqual(parse_size("1e"), 1.0)
        self.assertEqual(parse_size(".5x"), 0.5)
        self.assertEqual(parse_size("kW 12"), 0.0)

    def test_parse_size_rejects_non_scalars(self):
        self.assertEqual(parse_size([5]), 0.0)
        self.assertEqual(parse_size({"kw": 5}), 0.0)
        self.assertEqual(parse_size(True), 0.0)

    def test_format_size_input(self):
        self.assertEqual(format_size_input("5"), "5.00")
        self.assertEqual(format_size_input("3.14159"), "3.14")
        self.assertEqual(format_size_input("."), "")
        self.assertEqual(format_size_input(""), "")
        self.assertEqual(format_size_input("abc"), "abc")
        self.assertEqual(format_size_input("12kW"), "12.00")


class TestValidateRequest(unittest.TestCase):
    """Test request validation."""

    def test_valid_request(self):
        spec, error = validate_request("Alabama", "5.00")

        self.assertIsNone(error)
        self.assertEqual(spec, SystemSpec(state_name="Alabama", size_kw_dc=5.0))

    def test_state_required(self):
        spec, error = validate_request("", "5")

        self.assertIsNone(spec)
        self.assertEqual(error, STATE_REQUIRED_MSG)

    def test_state_must_be_text(self):
        spec, error = validate_request(["Ohio"], "5")

        self.assertIsNone(spec)
        self.assertEqual(error, STATE_REQUIRED_MSG)

    def test_state_checked_before_size(self):
        _, error = validate_request(None, "0")
        self.assertEqual(error, STATE_REQUIRED_MSG)

    def test_size_must_be_positive(self):
        for size in ["0", "-3", "", ".", "abc", 0, -1.5, [5]]:
            spec, error = validate_request("Texas", size)
            self.assertIsNone(spec)
            self.assertEqual(error, SIZE_REQUIRED_MSG)


class TestPrices(unittest.TestCase):
    """Test the electricity price table."""

    def test_table_has_all_states_and_dc(self):
        self.assertEqual(len(ELECTRICITY_PRICES), 51)
        self.assertIn('District of Columbia', ELECTRICITY_PRICES)
        self.assertTrue(all(price > 0 for price in ELECTRICITY_PRICES.values()))

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            ELECTRICITY_PRICES['Alabama'] = 1.0

    def test_get_price(self):
        self.assertEqual(get_price('Alabama'), 0.1491)
        self.assertEqual(get_price('Hawaii'), 0.4234)
        self.assertEqual(get_price('Atlantis'), DEFAULT_PRICE_PER_KWH)
        self.assertEqual(get_price(''), 0.13)
        self.assertEqual(get_price('Ohio', {'Ohio': 0.2}), 0.2)

    def test_state_options_sorted_with_prices(self):
        options = state_options()

        self.assertEqual(len(options), 51)
        self.assertEqual(options[0], "Alabama ($0.15/kWh)")
        self.assertEqual(options, sorted(options))


class TestLoadInputs(unittest.TestCase):
    """Test JSON scenario loading."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, data):
        path = os.path.join(self.tmpdir.name, 'inputs.json')
        with open(path, 'w') as f:
            json.dump(data, f)
        return path

    def test_load_with_defaults(self):
        data, defaults_used, warnings = load_inputs(self._write({'state': 'Ohio'}))

        self.assertEqual(data['size_kw_dc'], 5.0)
        self.assertEqual(defaults_used, ['size_kw_dc = 5.0'])
        self.assertEqual(warnings, [])

    def test_size_text_is_parsed(self):
        data, _, _ = load_inputs(self._write({'state': 'Ohio', 'size_kw_dc': '7.25'}))
        self.assertEqual(data['size_kw_dc'], 7.25)

    def test_unknown_state_warns(self):
        _, _, warnings = load_inputs(self._write({'state': 'Atlantis', 'size_kw_dc': 4}))

        self.assertEqual(len(warnings), 1)
        self.assertIn('Atlantis', warnings[0])

    def test_non_scalar_fields_raise_validation_error(self):
        with self.assertRaises(ValueError) as ctx:
            load_inputs(self._write({'state': 'Ohio', 'size_kw_dc': [5]}))
        self.assertIn("size_kw_dc must be a number", str(ctx.exception))

        with self.assertRaises(ValueError) as ctx:
            load_inputs(self._write({'state': ['Ohio'], 'size_kw_dc': 5}))
        self.assertIn("state must be a string", str(ctx.exception))

        with self.assertRaises(ValueError) as ctx:
            load_inputs(self._write({'state': 'Ohio', 'size_kw_dc': True}))
        self.assertIn("size_kw_dc must be a number", str(ctx.exception))

        with self.assertRaises(ValueError):
            load_inputs(self._write([{'state': 'Ohio'}]))

    def test_invalid_inputs_raise(self):
        with self.assertRaises(ValueError) as ctx:
            load_inputs(self._write({'size_kw_dc': 4}))
        self.assertIn(STATE_REQUIRED_MSG, str(ctx.exception))

        with self.assertRaises(ValueError) as ctx:
            load_inputs(self._write({'state': 'Ohio', 'size_kw_dc': 0}))
        self.assertIn(SIZE_REQUIRED_MSG, str(ctx.exception))


if __name__ == '__main__':
    unittest.main()

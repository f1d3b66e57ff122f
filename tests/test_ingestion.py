import json
import pathlib
import sys
import tempfile
import unittest

import numpy as np

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from signallab.config.defaults import DEFAULT_SAMPLING_RATE  # noqa: E402
from signallab.dataio.ingestion import (  # noqa: E402
    load_dataset_file,
    normalize_json,
    parse_delimited_text,
)
from signallab.errors import (  # noqa: E402
    DatasetValidationError,
    EmptyChannelError,
    EmptyInputError,
    InvalidEncodingError,
    InvalidJsonError,
    MissingChannelsError,
    NoNumericValuesError,
)


class NormalizeJsonTest(unittest.TestCase):
    def test_minimal_dataset_with_channels(self):
        ds = normalize_json({"samplingRate": 500, "channels": [{"data": [0, 1, 2]}]}, "test.json")

        self.assertEqual(ds.sampling_rate, 500)
        self.assertEqual(len(ds.channels), 1)
        self.assertEqual(ds.channels[0].id, "ch1")
        self.assertEqual(ds.channels[0].label, "Channel 1")
        np.testing.assert_array_equal(ds.channels[0].data, [0.0, 1.0, 2.0])
        self.assertEqual(ds.type, "Custom")
        self.assertEqual(ds.name, "test.json")
        self.assertTrue(ds.id.startswith("upload_"))
        self.assertEqual(ds.meta["schemaVersion"], 1)

    def test_generated_ids_are_unique(self):
        payload = {"channels": [{"data": [1]}]}
        self.assertNotEqual(normalize_json(payload).id, normalize_json(payload).id)

    def test_root_level_data_becomes_single_channel(self):
        ds = normalize_json({"samplingRate": 250, "data": [1, 2, 3]}, "root-data.json")

        self.assertEqual(len(ds.channels), 1)
        self.assertEqual(ds.channels[0].id, "ch1")
        np.testing.assert_array_equal(ds.channels[0].data, [1.0, 2.0, 3.0])
        self.assertEqual(ds.sampling_rate, 250)

    def test_invalid_sampling_rate_falls_back_to_default(self):
        for value in (None, 0, -10, "abc", float("nan")):
            with self.subTest(value=value):
                ds = normalize_json({"samplingRate": value, "channels": [{"data": [1]}]})
                self.assertEqual(ds.sampling_rate, DEFAULT_SAMPLING_RATE)

    def test_numeric_strings_are_coerced(self):
        ds = normalize_json({"samplingRate": "200", "channels": [{"data": ["1.5", 2]}]})
        self.assertEqual(ds.sampling_rate, 200.0)
        np.testing.assert_array_equal(ds.channels[0].data, [1.5, 2.0])

    def test_non_finite_values_are_dropped(self):
        with self.assertLogs("signallab.dataio.ingestion", level="WARNING"):
            ds = normalize_json(
                {"channels": [{"data": [1, "abc", None, float("inf"), "NaN", 2]}]}
            )
        np.testing.assert_array_equal(ds.channels[0].data, [1.0, 2.0])

    def test_explicit_metadata_is_kept(self):
        ds = normalize_json(
            {
                "id": "rec-7",
                "name": "Forearm",
                "type": "EMG",
                "description": "left arm",
                "labels": ["rest", "grip"],
                "channels": [
                    {"id": "flexor", "label": "Flexor", "data": [0.1, 0.2]},
                    {"data": [0.3, 0.4]},
                ],
            },
            "ignored.json",
        )
        self.assertEqual(ds.id, "rec-7")
        self.assertEqual(ds.name, "Forearm")
        self.assertEqual(ds.type, "EMG")
        self.assertEqual(ds.meta["description"], "left arm")
        self.assertEqual(ds.labels, ["rest", "grip"])
        self.assertEqual([ch.id for ch in ds.channels], ["flexor", "ch2"])
        self.assertEqual([ch.label for ch in ds.channels], ["Flexor", "Channel 2"])

    def test_labels_ignored_unless_list(self):
        ds = normalize_json({"labels": "grip", "channels": [{"data": [1]}]})
        self.assertIsNone(ds.labels)

    def test_ragged_channels_are_accepted_with_warning(self):
        with self.assertLogs("signallab.dataio.ingestion", level="WARNING") as logs:
            ds = normalize_json({"channels": [{"data": [1, 2, 3]}, {"data": [1]}]})
        self.assertEqual([len(ch) for ch in ds.channels], [3, 1])
        self.assertIn("different lengths", logs.output[0])

    def test_missing_channels_raises(self):
        with self.assertRaises(MissingChannelsError):
            normalize_json({}, "bad.json")

    def test_empty_channel_list_raises(self):
        with self.assertRaises(MissingChannelsError):
            normalize_json({"channels": [], "data": [1, 2]})

    def test_channel_without_numbers_raises(self):
        with self.assertRaises(EmptyChannelError):
            normalize_json({"channels": [{"data": ["a", None]}]})
        with self.assertRaises(EmptyChannelError):
            normalize_json({"channels": [{"data": "1,2,3"}]})

    def test_huge_integer_samples_are_dropped(self):
        with self.assertLogs("signallab.dataio.ingestion", level="WARNING"):
            ds = normalize_json({"channels": [{"data": [1, 10**400, 2]}]})
        np.testing.assert_array_equal(ds.channels[0].data, [1.0, 2.0])

    def test_huge_integer_sampling_rate_falls_back_to_default(self):
        payload = json.loads('{"samplingRate": 1' + "0" * 400 + ', "data": [1, 2]}')
        ds = normalize_json(payload)
        self.assertEqual(ds.sampling_rate, DEFAULT_SAMPLING_RATE)

    def test_underscore_digit_groups_are_not_numbers(self):
        with self.assertLogs("signallab.dataio.ingestion", level="WARNING"):
            ds = normalize_json({"samplingRate": "2_000", "channels": [{"data": ["1_000", 3]}]})
        self.assertEqual(ds.sampling_rate, DEFAULT_SAMPLING_RATE)
        np.testing.assert_array_equal(ds.channels[0].data, [3.0])

    def test_null_samples_are_dropped_not_zeroed(self):
        with self.assertLogs("signallab.dataio.ingestion", level="WARNING"):
            ds = normalize_json({"channels": [{"data": [None, 4, None]}]})
        np.testing.assert_array_equal(ds.channels[0].data, [4.0])

    def test_falsy_channels_fall_back_to_root_data(self):
        for channels in ("", 0, False):
            with self.subTest(channels=channels):
                ds = normalize_json({"channels": channels, "data": [7, 8]})
                self.assertEqual(ds.channels[0].id, "ch1")
                np.testing.assert_array_equal(ds.channels[0].data, [7.0, 8.0])

    def test_falsy_channels_without_data_raise(self):
        with self.assertRaises(MissingChannelsError):
            normalize_json({"channels": 0})

    def test_errors_share_a_validation_base(self):
        self.assertTrue(issubclass(MissingChannelsError, DatasetValidationError))
        self.assertTrue(issubclass(NoNumericValuesError, ValueError))


class ParseDelimitedTextTest(unittest.TestCase):
    def test_single_column(self):
        ds = parse_delimited_text("1\n2\n3\n", "simple.csv")

        self.assertEqual(len(ds.channels), 1)
        self.assertEqual(ds.channels[0].id, "ch1")
        self.assertEqual(ds.channels[0].label, "Channel 1")
        np.testing.assert_array_equal(ds.channels[0].data, [1.0, 2.0, 3.0])
        self.assertEqual(ds.sampling_rate, DEFAULT_SAMPLING_RATE)
        self.assertEqual(ds.name, "simple.csv")

    def test_last_column_is_the_signal(self):
        ds = parse_delimited_text("0,1\n1,2\n2,3\n")
        np.testing.assert_array_equal(ds.channels[0].data, [1.0, 2.0, 3.0])
        self.assertEqual(ds.name, "Uploaded CSV")

    def test_header_and_blank_lines_are_skipped(self):
        ds = parse_delimited_text("time,value\r\n\r\n0.0, 4.5\r\n  \n0.1,-1e-3\n")
        np.testing.assert_array_equal(ds.channels[0].data, [4.5, -0.001])

    def test_empty_input_raises(self):
        with self.assertRaises(EmptyInputError):
            parse_delimited_text("", "empty.csv")
        with self.assertRaises(EmptyInputError):
            parse_delimited_text("\n   \n")

    def test_no_numeric_values_raises(self):
        with self.assertRaises(NoNumericValuesError):
            parse_delimited_text("a,b\nc,d\n", "non-numeric.csv")

    def test_only_lf_and_crlf_end_a_record(self):
        ds = parse_delimited_text("5\n1\x0c2\n3\r4\r\n6\x0b7\x1c8\n")
        np.testing.assert_array_equal(ds.channels[0].data, [5.0])

    def test_underscore_digit_groups_are_skipped(self):
        with self.assertRaises(NoNumericValuesError):
            parse_delimited_text("1_000\n2_5\n")

    def test_empty_trailing_field_is_skipped_not_zeroed(self):
        ds = parse_delimited_text("0,\n1,2\n2,\n")
        np.testing.assert_array_equal(ds.channels[0].data, [2.0])

    def test_huge_integer_field_is_skipped(self):
        ds = parse_delimited_text("1" + "0" * 400 + "\n3\n")
        np.testing.assert_array_equal(ds.channels[0].data, [3.0])


class LoadDatasetFileTest(unittest.TestCase):
    def test_json_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "rec.json"
            path.write_text(json.dumps({"samplingRate": 100, "data": [1, 2]}), encoding="utf-8")

            ds = load_dataset_file(path)

            self.assertEqual(ds.name, "rec.json")
            self.assertEqual(ds.sampling_rate, 100)

    def test_csv_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "rec.csv"
            path.write_text("t,x\n0,5\n1,6\n", encoding="utf-8")

            ds = load_dataset_file(path)

            np.testing.assert_array_equal(ds.channels[0].data, [5.0, 6.0])
            self.assertEqual(ds.name, "rec.csv")

    def test_malformed_json_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "broken.json"
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(InvalidJsonError):
                load_dataset_file(path)

            path.write_text("[1, 2, 3]", encoding="utf-8")
            with self.assertRaises(InvalidJsonError):
                load_dataset_file(path)

    def test_non_utf8_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "latin.csv"
            path.write_bytes(b"\xff\xfe1\n2\n")
            with self.assertRaises(InvalidEncodingError):
                load_dataset_file(path)


if __name__ == "__main__":
    unittest.main()

import unittest

from ladok_synchronizer import exceptions
from ladok_synchronizer.ladok_data_models import decode_id
from ladok_synchronizer.ladok_data_models.utils import decode_optional_id


class TestDecodeId(unittest.TestCase):

    def test_number_and_string_agree(self):
        self.assertEqual(decode_id(42), 42)
        self.assertEqual(decode_id('42'), 42)
        self.assertEqual(decode_id(' 42 '), 42)

    def test_invalid_values(self):
        for value in (0, '0', 'abc', True, False, -1, '-1', '4.2', 4.2, '',
                      None, [], {}, 2 ** 32):
            with self.subTest(value=value):
                with self.assertRaises(exceptions.DecodeError):
                    decode_id(value)

    def test_error_names_field(self):
        with self.assertRaises(exceptions.DecodeError) as cm:
            decode_id('abc', 'BetygsskalaID')
        self.assertIn('BetygsskalaID', str(cm.exception))

    def test_optional(self):
        self.assertIsNone(decode_optional_id(None))
        self.assertEqual(decode_optional_id('7'), 7)


if __name__ == '__main__':
    unittest.main()

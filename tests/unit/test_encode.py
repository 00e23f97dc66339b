from unittest import TestCase
from nftregistry.db.encoder import encode, decode, encode_kv, decode_kv, MONGO_MAX_INT, MONGO_MIN_INT


class TestEncode(TestCase):
    def test_int_to_bytes(self):
        i = 1000
        b = '1000'

        self.assertEqual(encode(i), b)

    def test_str_to_bytes(self):
        s = 'hello'
        b = '"hello"'

        self.assertEqual(encode(s), b)

    def test_bool_stays_bool(self):
        self.assertEqual(encode(True), 'true')
        self.assertIs(decode('true'), True)

    def test_decode_bytes_to_int(self):
        b = '1234'
        i = 1234

        self.assertEqual(decode(b), i)

    def test_decode_bytes_to_str(self):
        b = '"howdy"'
        s = 'howdy'

        self.assertEqual(decode(b), s)

    def test_decode_failure(self):
        b = b'xwow'

        self.assertIsNone(decode(b))

    def test_decode_none(self):
        self.assertIsNone(decode(None))

    def test_bytes_encode(self):
        self.assertEqual(encode(b'\x00\xff'), '{"__bytes__":"00ff"}')

    def test_bytes_decode(self):
        self.assertEqual(decode('{"__bytes__":"00ff"}'), b'\x00\xff')

    def test_big_int_encode(self):
        big = MONGO_MAX_INT + 10

        self.assertEqual(encode(big), '{"__big_int__":"%d"}' % big)

    def test_big_negative_int_decode(self):
        small = MONGO_MIN_INT - 10

        self.assertEqual(decode(encode(small)), small)

    def test_big_ints_nested_in_dicts_and_lists(self):
        big = MONGO_MAX_INT * 4
        data = {'a': [1, big], 'b': {'c': big}}

        self.assertEqual(decode(encode(data)), data)

    def test_encode_kv(self):
        k, v = encode_kv('collection.owners:1', 'stu')

        self.assertEqual(k, b'collection.owners:1')
        self.assertEqual(v, b'"stu"')

    def test_decode_kv(self):
        k, v = decode_kv(b'collection.balances:stu', b'3')

        self.assertEqual(k, 'collection.balances:stu')
        self.assertEqual(v, 3)

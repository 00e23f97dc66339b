from unittest import TestCase
from nftregistry.db.driver import StateDriver
from nftregistry.db.orm import Datum, Variable, Hash
from nftregistry.exceptions import InvalidKey
from nftregistry import config

driver = StateDriver()


class TestDatum(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_init(self):
        d = Datum('stustu', 'test', driver)
        self.assertEqual(d._key, driver.make_key('stustu', 'test'))


class TestVariable(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_set(self):
        contract = 'stustu'
        name = 'balance'
        delimiter = driver.delimiter

        raw_key = '{}{}{}'.format(contract, delimiter, name)

        v = Variable(contract, name, driver=driver)
        v.set(1000)

        self.assertEqual(driver.get(raw_key), 1000)

    def test_get(self):
        raw_key = '{}{}{}'.format('stustu', driver.delimiter, 'balance')

        driver.set(raw_key, 1234)

        v = Variable('stustu', 'balance', driver=driver)

        self.assertEqual(v.get(), 1234)

    def test_default_value(self):
        v = Variable('stustu', 'count', driver=driver, default_value=0)

        self.assertEqual(v.get(), 0)

    def test_wrong_type_fails(self):
        v = Variable('stustu', 'count', driver=driver, t=int)

        with self.assertRaises(AssertionError):
            v.set('ten')


class TestHash(TestCase):
    def setUp(self):
        driver.flush()

    def tearDown(self):
        driver.flush()

    def test_set(self):
        raw_key = '{}{}{}:stu'.format('stustu', driver.delimiter, 'balance')

        h = Hash('stustu', 'balance', driver=driver)
        h['stu'] = 1234

        driver.commit()

        self.assertEqual(driver.get(raw_key), 1234)

    def test_default_value(self):
        h = Hash('stustu', 'balance', driver=driver, default_value=0)

        self.assertEqual(h['nobody'], 0)

    def test_multi_dimensional_key(self):
        h = Hash('stustu', 'operators', driver=driver)
        h['stu', 'colin'] = True

        self.assertTrue(h['stu', 'colin'])
        self.assertIsNone(h['colin', 'stu'])
        self.assertEqual(driver.get('stustu.operators:stu:colin'), True)

    def test_delete(self):
        h = Hash('stustu', 'owners', driver=driver)
        h['1'] = 'stu'
        driver.commit()

        del h['1']

        self.assertIsNone(h['1'])
        driver.commit()
        self.assertEqual(driver.keys(), [])

    def test_items_and_all(self):
        h = Hash('stustu', 'owners', driver=driver)
        h['1'] = 'stu'
        h['2'] = 'colin'

        self.assertEqual(h.items(), {'1': 'stu', '2': 'colin'})
        self.assertEqual(sorted(h.all()), ['colin', 'stu'])

    def test_items_does_not_leak_similar_names(self):
        h = Hash('stustu', 'owners', driver=driver)
        other = Hash('stustu', 'owners_two', driver=driver)
        h['1'] = 'stu'
        other['1'] = 'colin'

        self.assertEqual(h.items(), {'1': 'stu'})

    def test_clear(self):
        h = Hash('stustu', 'operators', driver=driver)
        h['stu', 'colin'] = True
        h['stu', 'raghu'] = True
        h['colin', 'stu'] = True

        h.clear('stu')

        self.assertEqual(h.items(), {'colin:stu': True})

    def test_delimiter_in_key_fails(self):
        h = Hash('stustu', 'owners', driver=driver)

        with self.assertRaises(InvalidKey):
            h['a:b'] = 'stu'

    def test_separator_in_key_fails(self):
        h = Hash('stustu', 'owners', driver=driver)

        with self.assertRaises(InvalidKey):
            h['a.b']

    def test_too_many_dimensions_fails(self):
        h = Hash('stustu', 'owners', driver=driver)
        key = tuple(str(i) for i in range(config.MAX_HASH_DIMENSIONS + 1))

        with self.assertRaises(InvalidKey):
            h[key] = 1

    def test_key_too_long_fails(self):
        h = Hash('stustu', 'owners', driver=driver)

        with self.assertRaises(InvalidKey):
            h['a' * (config.MAX_KEY_SIZE + 1)] = 1

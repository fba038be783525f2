from datetime import datetime, timedelta, timezone as dt_timezone
from types import SimpleNamespace

from django.test import SimpleTestCase

from contacts.listing import derive_view, get_field


T0 = datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)


def make(name, minutes=0, email=None, phone='5550000000', **extra):
    record = {
        'name': name,
        'email': email or f"{name.lower()}@example.com",
        'phone': phone,
        'created_at': T0 + timedelta(minutes=minutes),
    }
    record.update(extra)
    return record


class SortTests(SimpleTestCase):
    def setUp(self):
        self.bob = make('Bob', minutes=0)
        self.amy = make('Amy', minutes=5)
        self.records = [self.bob, self.amy]

    def test_sort_by_name_ascending(self):
        result = derive_view(self.records, '', 'name', 'asc')
        self.assertEqual([r['name'] for r in result], ['Amy', 'Bob'])

    def test_sort_by_name_descending(self):
        result = derive_view(self.records, '', 'name', 'desc')
        self.assertEqual([r['name'] for r in result], ['Bob', 'Amy'])

    def test_sort_by_created_at_newest_first(self):
        result = derive_view(self.records, '', 'created_at', 'desc')
        self.assertEqual(result, [self.amy, self.bob])

    def test_sort_by_created_at_oldest_first(self):
        result = derive_view(self.records, '', 'created_at', 'asc')
        self.assertEqual(result, [self.bob, self.amy])

    def test_name_sort_ignores_case_and_accents(self):
        records = [make('bob'), make('Émile'), make('alice'), make('Zoe')]
        result = derive_view(records, '', 'name', 'asc')
        self.assertEqual([r['name'] for r in result], ['alice', 'bob', 'Émile', 'Zoe'])

    def test_equal_keys_keep_input_order(self):
        first = make('Sam', minutes=1, phone='5551111111')
        second = make('Sam', minutes=2, phone='5552222222')
        third = make('Sam', minutes=3, phone='5553333333')
        for order in ('asc', 'desc'):
            with self.subTest(order=order):
                result = derive_view([first, second, third], '', 'name', order)
                self.assertEqual(result, [first, second, third])

    def test_camel_case_sort_key(self):
        result = derive_view(self.records, '', 'createdAt', 'desc')
        self.assertEqual(result, [self.amy, self.bob])

    def test_equal_timestamps_keep_input_order(self):
        first = make('Zed', minutes=7)
        second = make('Amy', minutes=7)
        third = make('Kim', minutes=7)
        for order in ('asc', 'desc'):
            with self.subTest(order=order):
                result = derive_view([first, second, third], '', 'created_at', order)
                self.assertEqual(result, [first, second, third])

    def test_lowercase_sorts_before_uppercase_on_ties(self):
        records = [make('Amy'), make('amy')]
        result = derive_view(records, '', 'name', 'asc')
        self.assertEqual([r['name'] for r in result], ['amy', 'Amy'])

    def test_impossible_timestamp_treated_as_missing(self):
        broken = make('Broken')
        broken['created_at'] = '2024-02-30T10:00:00'
        result = derive_view([self.bob, broken], '', 'created_at', 'asc')
        self.assertEqual(result, [broken, self.bob])

    def test_iso_strings_and_camel_case_timestamps(self):
        older = {'name': 'Old', 'email': 'o@x.io', 'phone': '1', 'createdAt': '2023-05-01T10:00:00Z'}
        newer = {'name': 'New', 'email': 'n@x.io', 'phone': '2', 'created_at': '2024-05-01T10:00:00+00:00'}
        result = derive_view([older, newer], '', 'created_at', 'desc')
        self.assertEqual(result, [newer, older])

    def test_naive_and_aware_timestamps_mix(self):
        naive = make('Naive')
        naive['created_at'] = datetime(2020, 1, 1)
        result = derive_view([self.bob, naive], '', 'created_at', 'asc')
        self.assertEqual(result[0], naive)

    def test_missing_sort_field_sorts_first_ascending(self):
        undated = {'name': 'Undated', 'email': 'u@x.io', 'phone': '1'}
        result = derive_view([self.bob, undated], '', 'created_at', 'asc')
        self.assertEqual(result[0], undated)

    def test_unknown_sort_key_or_order(self):
        with self.assertRaises(ValueError):
            derive_view(self.records, '', 'email', 'asc')
        with self.assertRaises(ValueError):
            derive_view(self.records, '', 'name', 'up')


class FilterTests(SimpleTestCase):
    def setUp(self):
        self.amy = make('Amy Adams', minutes=1, email='amy@example.com', phone='+1 555 100 2000')
        self.bob = make('Bob', minutes=2, email='bob@AMYmail.com', phone='5552003000')
        self.cat = make('Cat', minutes=3, email='cat@example.com', phone='5554005000')
        self.records = [self.amy, self.bob, self.cat]

    def test_matches_name_or_email_case_insensitively(self):
        result = derive_view(self.records, 'AMY', 'name', 'asc')
        self.assertEqual(result, [self.amy, self.bob])

    def test_matches_phone_substring(self):
        result = derive_view(self.records, '400', 'name', 'asc')
        self.assertEqual(result, [self.cat])

    def test_blank_query_keeps_everything(self):
        result = derive_view(self.records, '   ', 'created_at', 'asc')
        self.assertEqual(result, self.records)

    def test_query_matches_as_typed(self):
        # surrounding spaces only decide whether a query is blank
        self.assertEqual(derive_view(self.records, 'cat', 'name', 'asc'), [self.cat])
        self.assertEqual(derive_view(self.records, 'adams ', 'name', 'asc'), [])
        self.assertEqual(derive_view(self.records, 'amy ', 'name', 'asc'), [self.amy])

    def test_no_match(self):
        self.assertEqual(derive_view(self.records, 'zzz', 'name', 'asc'), [])

    def test_missing_fields_do_not_match(self):
        partial = {'name': 'Dora', 'created_at': T0}
        result = derive_view([partial], 'example', 'name', 'asc')
        self.assertEqual(result, [])
        self.assertEqual(derive_view([partial], 'dor', 'name', 'asc'), [partial])


class PurityTests(SimpleTestCase):
    def test_input_is_not_mutated(self):
        records = [make('Bob', 0), make('Amy', 1)]
        snapshot = list(records)
        result = derive_view(records, '', 'name', 'asc')
        self.assertEqual(records, snapshot)
        self.assertIsNot(result, records)

    def test_repeatable(self):
        records = [make('Bob', 0), make('Amy', 1), make('Cy', 2)]
        self.assertEqual(
            derive_view(records, 'y', 'name', 'desc'),
            derive_view(records, 'y', 'name', 'desc'),
        )

    def test_accepts_objects_with_attributes(self):
        first = SimpleNamespace(name='Zed', email='z@x.io', phone='1', created_at=T0)
        second = SimpleNamespace(name='Ann', email='a@x.io', phone='2', created_at=T0)
        self.assertEqual(derive_view((first, second), '', 'name', 'asc'), [second, first])
        self.assertEqual(get_field(first, 'message'), None)

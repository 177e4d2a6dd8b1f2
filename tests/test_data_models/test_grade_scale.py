import unittest

import responses

from ladok_synchronizer import LadokSession, exceptions
from ladok_synchronizer.ladok_data_models import (GradeCode, GradeScale,
                                                  GradeScaleCache, LadokAgent)
from ..constants import LADOK_URL, load_fixture


class TestGradeScale(unittest.TestCase):

    def setUp(self):
        self.scale = GradeScale.from_ladok_json(
            load_fixture('ladok_grade_scale')
        )

    def test_parse(self):
        self.assertEqual(self.scale.id, 131657)
        self.assertEqual(self.scale.code, 'AF')
        self.assertEqual([g.id for g in self.scale.grades], [1, 2, 3])
        self.assertFalse(self.scale.get('F').valid_as_final)

    def test_get_ignores_case(self):
        self.assertEqual(self.scale.get('a'), self.scale.get('A'))
        self.assertIsNone(self.scale.get('Z'))

    def test_get_folds_case_of_stored_codes(self):
        scale = GradeScale(id=1, code='AF', grades=(
            GradeCode(id=6, code='Fx', valid_as_final=False),
        ))
        for code in ('Fx', 'fx', 'FX', ' fX '):
            self.assertEqual(scale.get(code).id, 6)

    def test_missing_code(self):
        with self.assertRaises(exceptions.DecodeError):
            GradeScale.from_ladok_json({'ID': 1, 'Betygsgrad': []})


class TestGradeScaleCache(unittest.TestCase):

    url = f'{LADOK_URL}/grunddata/betygsskala/131657'

    def setUp(self):
        self.responses = responses.RequestsMock()
        self.responses.start()
        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)
        self.agent = LadokAgent(LadokSession(cert='client.pem'),
                                host='api.test.ladok.se')

    def test_fetches_once(self):
        self.responses.add(responses.GET, self.url,
                           json=load_fixture('ladok_grade_scale'))
        cache = GradeScaleCache(self.agent.get_grade_scale)
        first = cache.resolve_grade(131657, 'a')
        second = cache.resolve_grade(131657, 'A')
        cache.resolve_grade(131657, 'B')

        self.assertEqual(first, second)
        self.assertEqual(first.id, 1)
        self.assertEqual(len(self.responses.calls), 1)
        self.assertIn(131657, cache.scales)

    def test_unknown_grade(self):
        self.responses.add(responses.GET, self.url,
                           json=load_fixture('ladok_grade_scale'))
        cache = GradeScaleCache(self.agent.get_grade_scale)
        with self.assertRaises(exceptions.UnknownGradeError):
            cache.resolve_grade(131657, 'Z')

    def test_fetch_failure(self):
        self.responses.add(responses.GET, self.url, status=404,
                           body='not found')
        cache = GradeScaleCache(self.agent.get_grade_scale)
        with self.assertRaises(exceptions.FetchError) as cm:
            cache.resolve_grade(131657, 'A')
        self.assertEqual(cm.exception.status, 404)
        self.assertEqual(cache.scales, {})

    def test_seeded_cache(self):
        def fail(scale_id):
            raise AssertionError(f'Unexpected fetch of {scale_id}')

        scale = GradeScale(5, 'PF', (GradeCode(10, 'P', True),
                                     GradeCode(11, 'F', False)))
        cache = GradeScaleCache(fail, scales={5: scale})
        self.assertEqual(cache.resolve_grade(5, 'p').id, 10)


if __name__ == '__main__':
    unittest.main()

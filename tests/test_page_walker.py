import json
import unittest

import requests
import responses

from ladok_synchronizer import exceptions
from ladok_synchronizer.page_walker import CountPageWalker, LinkPageWalker
from ladok_synchronizer.utils import get_next_url

FIRST = ('https://kth.test.instructure.com/api/v1/courses/7798/students/'
         'submissions?student_ids%5B%5D=all&page=first&per_page=100')
NEXT = ('https://kth.test.instructure.com/api/v1/courses/7798/students/'
        'submissions?student_ids%5B%5D=all&page=bookmark:WzY1OTU4MzZd'
        '&per_page=100')


class TestGetNextUrl(unittest.TestCase):

    def test_next(self):
        links = (f'<{FIRST}>; rel="current",<{NEXT}>; rel="next",'
                 f'<{FIRST}>; rel="first"')
        self.assertEqual(get_next_url(links), NEXT)

    def test_no_next(self):
        links = f'<{FIRST}>; rel="current",<{FIRST}>; rel="first"'
        self.assertIsNone(get_next_url(links))
        self.assertIsNone(get_next_url(None))
        self.assertIsNone(get_next_url(''))


class TestLinkPageWalker(unittest.TestCase):

    url = 'https://canvas.test/api/v1/items'

    def setUp(self):
        self.responses = responses.RequestsMock()
        self.responses.start()
        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)
        self.walker = LinkPageWalker(requests.Session())

    def page_url(self, page: int) -> str:
        return self.url if page == 1 else f'{self.url}/pages/{page}'

    def add_pages(self, n_pages: int, per_page: int = 2):
        for page in range(1, n_pages + 1):
            headers = {}
            if page < n_pages:
                headers['Link'] = (f'<{self.page_url(1)}>; rel="first",'
                                   f'<{self.page_url(page + 1)}>; '
                                   'rel="next"')
            items = [{'id': (page - 1) * per_page + i}
                     for i in range(per_page)]
            self.responses.add(responses.GET, self.page_url(page),
                               json=items, headers=headers)

    def test_all_pages_in_order(self):
        self.add_pages(3)
        items = self.walker.fetch_all(self.url)
        self.assertEqual([i['id'] for i in items], list(range(6)))
        self.assertEqual(len(self.responses.calls), 3)

    def test_single_page(self):
        self.add_pages(1)
        self.assertEqual(len(self.walker.fetch_all(self.url)), 2)

    def test_failure_discards_pages(self):
        self.responses.add(responses.GET, self.url, json=[{'id': 0}],
                           headers={'Link': f'<{self.page_url(2)}>; '
                                            'rel="next"'})
        self.responses.add(responses.GET, self.page_url(2), status=500,
                           body='oops')
        with self.assertRaises(exceptions.FetchError) as cm:
            self.walker.fetch_all(self.url)
        self.assertEqual(cm.exception.status, 500)
        self.assertEqual(cm.exception.body, 'oops')

    def test_page_not_a_list(self):
        self.responses.add(responses.GET, self.url,
                           json={'errors': [{'message': 'bad'}]})
        with self.assertRaises(exceptions.DecodeError):
            self.walker.fetch_all(self.url)


class TestCountPageWalker(unittest.TestCase):

    url = 'https://ladok.test/resultat/sok'
    payload = {'OrderBy': ['EFTERNAMN_ASC', 'FORNAMN_ASC'], 'Page': 1,
               'Limit': 2}

    def setUp(self):
        self.responses = responses.RequestsMock()
        self.responses.start()
        self.addCleanup(self.responses.stop)
        self.addCleanup(self.responses.reset)
        self.walker = CountPageWalker(requests.Session())

    def add_page(self, items, total=5, **kwargs):
        self.responses.add(responses.PUT, self.url,
                           json={'Resultat': items,
                                 'TotaltAntalPoster': total}, **kwargs)

    def test_reads_until_total(self):
        self.add_page([1, 2])
        self.add_page([3, 4])
        self.add_page([5])
        items, total = self.walker.fetch_all('PUT', self.url, self.payload,
                                             'Resultat', 'TotaltAntalPoster')
        self.assertEqual(items, [1, 2, 3, 4, 5])
        self.assertEqual(total, 5)

        bodies = [json.loads(c.request.body) for c in self.responses.calls]
        self.assertEqual([b['Page'] for b in bodies], [1, 2, 3])
        for body in bodies:
            self.assertEqual(body['OrderBy'], self.payload['OrderBy'])
            self.assertEqual(body['Limit'], 2)
        self.assertEqual(self.payload['Page'], 1)

    def test_stops_on_empty_page(self):
        self.add_page([1, 2])
        self.add_page([])
        items, total = self.walker.fetch_all('PUT', self.url, self.payload,
                                             'Resultat', 'TotaltAntalPoster')
        self.assertEqual(items, [1, 2])
        self.assertEqual(len(self.responses.calls), 2)

    def test_failure(self):
        self.add_page([1, 2])
        self.responses.add(responses.PUT, self.url, status=403,
                           body='forbidden')
        with self.assertRaises(exceptions.FetchError) as cm:
            self.walker.fetch_all('PUT', self.url, self.payload, 'Resultat',
                                  'TotaltAntalPoster')
        self.assertEqual(cm.exception.status, 403)

    def test_missing_total(self):
        self.responses.add(responses.PUT, self.url, json={'Resultat': [1]})
        with self.assertRaises(exceptions.DecodeError):
            self.walker.fetch_all('PUT', self.url, self.payload, 'Resultat',
                                  'TotaltAntalPoster')

    def test_non_numeric_total(self):
        self.add_page([1, 2], total='many')
        with self.assertRaises(exceptions.DecodeError) as cm:
            self.walker.fetch_all('PUT', self.url, self.payload, 'Resultat',
                                  'TotaltAntalPoster')
        self.assertEqual(cm.exception.field, 'TotaltAntalPoster')


if __name__ == '__main__':
    unittest.main()

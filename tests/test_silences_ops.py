"""
Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
import unittest
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

try:
    from ._env import ensure_test_env
except ImportError:
    from tests._env import ensure_test_env

ensure_test_env()

from alertmanager_kit import AlertmanagerClient, ClientConfig
from alertmanager_kit.errors import DecodeError, StatusError
from alertmanager_kit.models.silences import Matcher, PostableSilence, SilenceState
from alertmanager_kit.ops import silences_ops
from tests.fake_alertmanager import FakeAlertmanagerCluster


def _window(start_offset, end_offset):
    now = datetime.now(timezone.utc).replace(microsecond=0)
    return now + timedelta(minutes=start_offset), now + timedelta(minutes=end_offset)


def _silence(start_offset=-1, end_offset=60, **overrides):
    starts_at, ends_at = _window(start_offset, end_offset)
    values = dict(
        matchers=[
            Matcher(name='alertname', value='DiskFull', is_regex=False),
            Matcher(name='instance', value='db-.*', is_regex=True),
        ],
        starts_at=starts_at,
        ends_at=ends_at,
        created_by='alice',
        comment='maintenance window',
    )
    values.update(overrides)
    return PostableSilence(**values)


class SilenceRoundTripTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self):
        self.fake = FakeAlertmanagerCluster(peers=['10.0.0.2:9094', '10.0.0.3:9094'])
        self.client = AlertmanagerClient(ClientConfig(url='http://am:9093'), http_client=self.fake.client())

    async def asyncTearDown(self):
        await self.client._http.aclose()

    async def test_post_then_get_round_trip(self):
        posted = _silence()
        silence_id = await self.client.post_silence(posted)

        fetched = await self.client.get_silence(silence_id)

        self.assertEqual(fetched.id, silence_id)
        self.assertEqual(fetched.matchers, posted.matchers)
        self.assertEqual((fetched.starts_at, fetched.ends_at), (posted.starts_at, posted.ends_at))
        self.assertEqual(fetched.comment, 'maintenance window')
        self.assertEqual(fetched.created_by, 'alice')
        self.assertEqual(fetched.status.state, SilenceState.ACTIVE)

    async def test_future_silence_is_pending(self):
        silence_id = await self.client.post_silence(_silence(start_offset=30, end_offset=90))
        self.assertEqual((await self.client.get_silence(silence_id)).status.state, SilenceState.PENDING)

    async def test_delete_expires_silence(self):
        silence_id = await self.client.post_silence(_silence())
        await self.client.delete_silence(silence_id)
        self.assertEqual((await self.client.get_silence(silence_id)).status.state, SilenceState.EXPIRED)

    async def test_silence_writes_never_fan_out(self):
        await self.client.post_silence(_silence())
        self.assertEqual({c.host for c in self.fake.calls}, {'am'})

    async def test_update_keeps_identifier(self):
        silence_id = await self.client.post_silence(_silence())
        updated_id = await self.client.update_silence(silence_id, _silence(comment='extended'))

        self.assertEqual(updated_id, silence_id)
        self.assertEqual(self.fake.calls_to('/silences', 'POST')[-1].body['id'], silence_id)
        self.assertEqual((await self.client.get_silence(silence_id)).comment, 'extended')

    async def test_get_silences_passes_filter(self):
        await self.client.post_silence(_silence())
        silences = await self.client.get_silences(['alertname="DiskFull"'])

        self.assertEqual(len(silences), 1)
        self.assertEqual(self.fake.calls_to('/silences', 'GET')[0].params['filter'], ['alertname="DiskFull"'])

    async def test_unknown_silence_raises_status_error(self):
        with self.assertRaises(StatusError) as ctx:
            await self.client.get_silence('0b7d3b9e-6f1a-4a4e-9c53-000000000000')
        self.assertEqual(ctx.exception.status_code, 404)


class SilenceDecodeTests(unittest.IsolatedAsyncioTestCase):
    def _service(self, **methods):
        return SimpleNamespace(
            shared=SimpleNamespace(base_url='http://am:9093', **methods),
            logger=logging.getLogger('test'),
        )

    async def test_post_without_silence_id_is_a_decode_error(self):
        service = self._service(post_silences=AsyncMock(return_value={}))
        with self.assertRaises(DecodeError) as ctx:
            await silences_ops.post_silence(service, _silence())
        self.assertEqual(ctx.exception.operation, 'post_silence')

    async def test_silence_without_status_is_a_decode_error(self):
        payload = {
            'id': 's1',
            'matchers': [{'name': 'a', 'value': 'b', 'isRegex': False}],
            'startsAt': '2026-01-01T00:00:00Z',
            'endsAt': '2026-01-01T01:00:00Z',
            'createdBy': 'alice',
            'comment': 'note',
            'updatedAt': '2026-01-01T00:00:00Z',
        }
        service = self._service(get_silence=AsyncMock(return_value=payload))
        with self.assertRaises(DecodeError):
            await silences_ops.get_silence(service, 's1')

        payload['status'] = {'state': 'active'}
        silence = await silences_ops.get_silence(service, 's1')
        self.assertTrue(silence.matchers[0].is_equal)

    async def test_matcher_without_is_regex_is_a_decode_error(self):
        payload = [{
            'id': 's1',
            'matchers': [{'name': 'a', 'value': 'b'}],
            'startsAt': '2026-01-01T00:00:00Z',
            'endsAt': '2026-01-01T01:00:00Z',
            'createdBy': 'alice',
            'comment': 'note',
            'updatedAt': '2026-01-01T00:00:00Z',
            'status': {'state': 'active'},
        }]
        service = self._service(get_silences=AsyncMock(return_value=payload))
        with self.assertRaises(DecodeError):
            await silences_ops.get_silences(service)


if __name__ == '__main__':
    unittest.main()

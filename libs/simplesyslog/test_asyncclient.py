import re
import socket
import unittest

from unittest import mock

from curio import run, sleep

from . import asyncclient, exceptions
from .asyncclient import AsyncSyslogClient, connect
from .options import SyslogOptions
from .priority import LOG_LOCAL0, LOG_NOTICE


MESSAGE_REGEX = re.compile(rb'<133>[A-Z][a-z]{2} (([0-9]{2})|( [0-9])) [0-9]{2}:[0-9]{2}:[0-9]{2} testing/127\.0\.0\.1 foo bar baz')


class FakeAsyncConnection(object):

    def __init__(self, fail_after = None):
        self.written = bytearray()
        self.fail_after = fail_after
        self.sends = 0
        self.closed = False

    async def send(self, data):
        data = bytes(data)
        if self.fail_after is not None:
            if len(self.written) >= self.fail_after:
                raise ConnectionResetError('connection reset')
            data = data[:self.fail_after - len(self.written)]
        self.written += data
        self.sends += 1
        return len(data)

    def getsockname(self):
        return ('127.0.0.1', 40514)

    async def close(self):
        self.closed = True


class SlowAsyncConnection(FakeAsyncConnection):

    async def send(self, data):
        await sleep(1)
        return await super().send(data)


class SlowSocket(object):
    instances = []

    def __init__(self, *args):
        self.closed = False
        SlowSocket.instances.append(self)

    async def connect(self, address):
        await sleep(1)

    async def close(self):
        self.closed = True


class TestAsyncSyslogClient(unittest.TestCase):

    def setUp(self):
        self.connection = FakeAsyncConnection()
        self.client = AsyncSyslogClient(self.connection, hostname = 'testing')

    def test_send(self):
        written = run(self.client.send('foo bar baz', LOG_LOCAL0|LOG_NOTICE))
        self.assertTrue(MESSAGE_REGEX.fullmatch(bytes(self.connection.written)))
        self.assertEqual(written, self.client.bytes_sent)

    def test_send_raw(self):
        run(self.client.send_raw('bar'))
        self.assertEqual(bytes(self.connection.written), b'bar')

    def test_budget(self):
        self.client.set_max_bytes(5)
        async def main():
            await self.client.send_raw('abc')
            await self.client.send_raw('abc')
            await self.client.send_raw('abc')
        with self.assertRaises(exceptions.BudgetExceeded):
            run(main)
        self.assertEqual(self.connection.sends, 2)
        self.assertEqual(self.client.bytes_sent, 6)

    def test_failed_write_counts_partial_progress(self):
        self.connection.fail_after = 4
        with self.assertRaises(exceptions.WriteFailure) as context:
            run(self.client.send_raw('x' * 10))
        self.assertEqual(context.exception.bytes_written, 4)
        self.assertEqual(self.client.bytes_sent, 4)

    def test_close(self):
        async def main():
            async with self.client:
                await self.client.send_raw('foo')
            await self.client.close()
            await self.client.send_raw('foo')
        with self.assertRaises(exceptions.ClientClosed):
            run(main)
        self.assertTrue(self.connection.closed)

    def test_write_timeout(self):
        client = AsyncSyslogClient(SlowAsyncConnection(), SyslogOptions(timeout = 0.05), hostname = 'testing')
        with self.assertRaises(exceptions.WriteFailure) as context:
            run(client.send_raw('foo'))
        self.assertEqual(context.exception.bytes_written, 0)
        self.assertEqual(client.bytes_sent, 0)


class TestAsyncConnect(unittest.TestCase):

    def listen(self, kind):
        listener = socket.socket(socket.AF_INET, kind)
        self.addCleanup(listener.close)
        listener.settimeout(5)
        listener.bind(('127.0.0.1', 0))
        if kind == socket.SOCK_STREAM:
            listener.listen(1)
        return listener, '127.0.0.1:{}'.format(listener.getsockname()[1])

    def test_unknown_transport(self):
        with self.assertRaises(exceptions.UnknownTransport):
            run(connect('sctp', '127.0.0.1:514'))

    def test_connect_timeout(self):
        async def slow_dial(*args):
            await sleep(1)
        with mock.patch.object(asyncclient, 'dial', slow_dial):
            with self.assertRaises(exceptions.TransportFailure):
                run(connect('udp', '127.0.0.1:514', SyslogOptions(timeout = 0.05)))

    def test_udp_socket_closed_on_timeout(self):
        SlowSocket.instances = []
        with mock.patch.object(asyncclient.curiosocket, 'socket', SlowSocket):
            with self.assertRaises(exceptions.TransportFailure):
                run(connect('udp', '127.0.0.1:514', SyslogOptions(timeout = 0.05)))
        self.assertEqual(len(SlowSocket.instances), 1)
        self.assertTrue(SlowSocket.instances[0].closed)

    def test_tls_uses_given_context(self):
        context = object()
        calls = []
        async def fake_open_connection(host, port, **kwargs):
            calls.append((host, port, kwargs))
            return FakeAsyncConnection()
        with mock.patch.object(asyncclient, 'open_connection', fake_open_connection):
            client = run(connect('tls', '127.0.0.1:6514', ssl_context = context))
        self.assertIsInstance(client, AsyncSyslogClient)
        self.assertEqual(calls, [('127.0.0.1', 6514, { 'ssl': context, 'server_hostname': '127.0.0.1' })])

    def test_udp(self):
        listener, address = self.listen(socket.SOCK_DGRAM)
        async def main():
            async with await connect('udp', address) as client:
                client.hostname = 'testing'
                return await client.send('foo bar baz', facility = 'local0', severity = 'notice')
        written = run(main)
        data = listener.recv(1024)
        self.assertTrue(MESSAGE_REGEX.fullmatch(data), data)
        self.assertEqual(written, len(data))

    def test_tcp(self):
        listener, address = self.listen(socket.SOCK_STREAM)
        async def main():
            client = await connect('tcp', address, SyslogOptions(timeout = 5))
            client.hostname = 'testing'
            await client.send('foo bar baz', LOG_LOCAL0|LOG_NOTICE)
            await client.close()
        run(main)
        connection, _ = listener.accept()
        with connection:
            connection.settimeout(5)
            data = b''
            while True:
                chunk = connection.recv(4096)
                if not chunk:
                    break
                data += chunk
        self.assertTrue(MESSAGE_REGEX.fullmatch(data), data)


if __name__ == '__main__':
    unittest.main()

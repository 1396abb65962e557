import socket

import server


def test_no_arguments_prints_usage(capsys):
    assert server.main(['plaincache']) == 1

    out = capsys.readouterr().out
    assert out.startswith('Usage:\nplaincache server_address\n')
    assert 'plaincache [::1]:http' in out


def test_bad_address_prints_error_and_usage(capsys):
    assert server.main(['plaincache', 'not-an-address']) == 1

    out = capsys.readouterr().out
    assert out.startswith('error resolving address: ')
    assert 'Usage:' in out


def test_bind_failure_exits_non_zero(capsys):
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(('127.0.0.1', 0))
        sock.listen()
        port = sock.getsockname()[1]

        assert server.main(['plaincache', f'127.0.0.1:{port}']) == 1

    assert capsys.readouterr().out.startswith('error: ')

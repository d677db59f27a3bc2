import json
from unittest.mock import Mock, patch

import google.auth.exceptions
import pytest

from gwsheets import CredentialsError
from gwsheets.access import (GoogleSheetsSession, build_credential, build_sheet_service,
                             get_scope, resolve_scopes, SCOPES)

def _valid_creds():
    creds = Mock()
    creds.valid = True
    creds.scopes = [SCOPES['sheets']]
    return creds

def test_scopes():
    assert(get_scope("sheets") == "https://www.googleapis.com/auth/spreadsheets")
    assert(get_scope("https://www.googleapis.com/auth/drive") == "https://www.googleapis.com/auth/drive")
    assert(get_scope("bogus") == "")
    assert(resolve_scopes(["sheets", "bogus", "sheets", "drive-ro"]) ==
           [SCOPES['sheets'], SCOPES['drive-ro']])
    assert(resolve_scopes("sheets-ro") == [SCOPES['sheets-ro']])
    assert(resolve_scopes(None) == [])

def test_service_account(tmp_path):
    key = tmp_path / "key.json"
    with patch('gwsheets.access.service_account.Credentials.from_service_account_file') as from_file:
        creds = build_credential({'service_account': str(key), 'scopes': ['sheets'],
                                  'subject': 'someone@example.com'})
    from_file.assert_called_once_with(str(key), scopes=[SCOPES['sheets']])
    from_file.return_value.with_subject.assert_called_once_with('someone@example.com')
    assert(creds is from_file.return_value.with_subject.return_value)

def test_default_credentials_fallback(tmp_path):
    config = {'cache': str(tmp_path / "tokens.json"), 'secrets': str(tmp_path / "secrets.json")}
    default_creds = _valid_creds()
    with patch('gwsheets.access.google.auth.default', return_value=(default_creds, "project")) as default:
        assert(build_credential(config) is default_creds)
    assert(default.call_args.kwargs['scopes'] == [SCOPES['sheets'], SCOPES['drive-ro']])

def test_no_credentials(tmp_path):
    config = {'cache': str(tmp_path / "tokens.json"), 'secrets': str(tmp_path / "secrets.json")}
    with patch('gwsheets.access.google.auth.default',
               side_effect=google.auth.exceptions.DefaultCredentialsError("none")):
        with pytest.raises(CredentialsError):
            build_credential(config)

def test_no_scopes():
    with pytest.raises(CredentialsError):
        build_credential({'scopes': ['bogus']})

def test_stale_cache_discarded(tmp_path):
    cache = tmp_path / "tokens.json"
    cache.write_text(json.dumps({'refresh_token': 'r', 'client_id': 'c', 'client_secret': 's',
                                 'scopes': [SCOPES['sheets-ro']]}))
    config = {'cache': str(cache), 'secrets': str(tmp_path / "secrets.json"), 'scopes': ['sheets']}
    with patch('gwsheets.access.google.auth.default', return_value=(_valid_creds(), None)):
        build_credential(config)
    assert(not cache.exists())

def test_cached_token_reused(tmp_path):
    cache = tmp_path / "tokens.json"
    cache.write_text(json.dumps({'refresh_token': 'r', 'client_id': 'c', 'client_secret': 's',
                                 'scopes': [SCOPES['sheets']]}))
    cached = _valid_creds()
    with patch('gwsheets.access.Credentials.from_authorized_user_file', return_value=cached) as from_file:
        creds = build_credential({'cache': str(cache), 'scopes': ['sheets']})
    assert(creds is cached)
    from_file.assert_called_once_with(str(cache.resolve()), [SCOPES['sheets']])

def test_oauth_flow_writes_cache(tmp_path):
    cache = tmp_path / "tokens.json"
    secrets = tmp_path / "secrets.json"
    secrets.write_text("{}")
    flow_creds = _valid_creds()
    flow_creds.refresh_token = "refresh"
    flow_creds.client_id = "client"
    flow_creds.client_secret = "secret"
    with patch('gwsheets.access.InstalledAppFlow.from_client_secrets_file') as from_secrets:
        from_secrets.return_value.run_local_server.return_value = flow_creds
        creds = build_credential({'cache': str(cache), 'secrets': str(secrets), 'scopes': ['sheets']})
    assert(creds is flow_creds)
    saved = json.loads(cache.read_text())
    assert(saved == {'refresh_token': 'refresh', 'client_id': 'client', 'client_secret': 'secret',
                     'scopes': [SCOPES['sheets']]})

def test_session_builds_services_once():
    session = GoogleSheetsSession(credentials=_valid_creds())
    assert(session.connected)
    with patch('gwsheets.access.build') as build:
        s1 = session.sheets
        s2 = session.sheets
        d = session.drive
    assert(s1 is s2)
    assert(build.call_count == 2)
    assert(build.call_args_list[0].args == ("sheets", "v4"))
    assert(build.call_args_list[1].args == ("drive", "v3"))
    assert(set(session.services.keys()) == {"sheets:v4", "drive:v3"})

def test_session_connects_on_first_use():
    session = GoogleSheetsSession({'scopes': ['sheets']})
    assert(not session)
    creds = _valid_creds()
    with patch('gwsheets.access.build_credential', return_value=creds) as build_cred, \
         patch('gwsheets.access.build'):
        session.get_service("sheets", "v4")
        session.get_service("sheets", "v4")
    build_cred.assert_called_once()
    assert(session.creds is creds)

def test_config_change_drops_credentials():
    session = GoogleSheetsSession({'scopes': ['sheets']}, credentials=_valid_creds())
    with patch('gwsheets.access.build'):
        session.get_service("sheets", "v4")
    session.config = {'port': 8080}
    assert(session.connected)
    assert(session.services)
    session.config = {'scopes': ['sheets', 'drive']}
    assert(not session.connected)
    assert(not session.services)
    assert(session.config == {'scopes': ['sheets', 'drive'], 'port': 8080})
    assert(session.scopes == [SCOPES['sheets'], SCOPES['drive']])

def test_from_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({'service_account': 'key.json', 'scopes': ['sheets']}))
    session = GoogleSheetsSession.from_file(path)
    assert(session.config['service_account'] == 'key.json')

def test_build_sheet_service_connects():
    with patch('gwsheets.access.build_credential', return_value=_valid_creds()):
        session = build_sheet_service({'scopes': ['sheets']})
    assert(session.connected)

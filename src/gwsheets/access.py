from collections.abc import Iterable
from pathlib import Path
import json
import copy
import logging

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google.oauth2 import service_account
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build, Resource
import googleapiclient.discovery_cache as gws_discovery_cache

from .errors import CredentialsError

logger = logging.getLogger(__name__)

SCOPES = {
    "sheets": "https://www.googleapis.com/auth/spreadsheets",
    "sheets-ro": "https://www.googleapis.com/auth/spreadsheets.readonly",
    "drive-file": "https://www.googleapis.com/auth/drive.file",
    "drive": "https://www.googleapis.com/auth/drive",
    "drive-ro": "https://www.googleapis.com/auth/drive.readonly",
    "openid": "openid",
    "email": "email",
    "profile": "profile",
    "userinfo-email": "https://www.googleapis.com/auth/userinfo.email",
    "userinfo-profile": "https://www.googleapis.com/auth/userinfo.profile"
}
SCOPE_URL_PREFIX = "https://www.googleapis.com/"
DEFAULT_SCOPES = ["sheets", "drive-ro"]

DEFAULT_SECRETS = str((Path.home() / "gws_client_secrets.json").absolute())
DEFAULT_CACHE = str((Path.home() / "gws_tokens.json").absolute())
DEFAULT_AUTH_PROMPT_MSG = "Please visit this URL to authorize gwsheets: {url}"
DEFAULT_AUTH_FLOW_SUCCESS_MSG = "Authorization complete, you may close this window."

def get_scope(scope: str) -> str:
    """
    Get a scope based on simplified label.
    A raw URL will also be accepted.  Unknown labels give an empty string.
    """
    s = str(scope)
    sc = SCOPES.get(s, "")
    if not sc and s.startswith(SCOPE_URL_PREFIX):
        sc = s
    return sc

def resolve_scopes(value: None|str|Iterable[str]) -> list[str]:
    """
    Translate a label, URL or list of them into a de-duplicated
    list of scope URLs, dropping anything unrecognised.
    """
    if value is None:
        return []
    vals = [value] if isinstance(value, str) or not isinstance(value, Iterable) else value
    slist = []
    for v in vals:
        s = get_scope(str(v))
        if s and s not in slist:
            slist.append(s)
    return slist

def _from_token_cache(cache: Path, scopes: list[str]) -> Credentials|None:
    """
    Reuse a cached authorized-user token if it covers the requested scopes,
    refreshing it when expired.  A cache that can't be used is deleted.
    """
    if not (cache.exists() and cache.is_file()):
        return None
    cf = cache.resolve()
    with open(cf, 'r', encoding='utf-8') as f:
        j = json.load(f)
    cached_scopes = j.get('scopes', [])
    if not all(s in cached_scopes for s in scopes):
        logger.warning("token cache %s does not cover requested scopes, discarding", cf)
        cache.unlink()
        return None
    creds = Credentials.from_authorized_user_file(str(cf), scopes)
    if not creds.valid and creds.refresh_token:
        try:
            creds.refresh(Request())
        except google.auth.exceptions.RefreshError as e:
            logger.warning("failed to refresh stored creds: %s, deleting cred cache", e)
    if not creds.valid:
        cache.unlink(missing_ok=True)
        return None
    return creds

def _save_token_cache(cache: Path, creds: Credentials, scopes: list[str]) -> None:
    # only what a later refresh needs
    user_info = {'refresh_token': creds.refresh_token, 'client_id': creds.client_id,
                 'client_secret': creds.client_secret, 'scopes': scopes}
    with open(cache.resolve(), 'w', encoding='utf-8') as f:
        json.dump(user_info, f, ensure_ascii=False, indent=2)

def build_credential(config: dict):
    """
    Turn a configuration map into an OAuth2 credential.
    The following keys are consulted, first match wins:

        service_account: path to a service account key file, with an optional
                         'subject' to impersonate under domain-wide delegation.
        cache:           cached user token from an earlier OAuth flow.
        secrets:         installed-app client secrets, triggers the OAuth
                         consent flow in a browser and writes 'cache'.

    Failing all of those Application Default Credentials are tried, which will
    look at the GOOGLE_APPLICATION_CREDENTIALS envvar and other cloud default
    locations.  'scopes' is a list of labels (see SCOPES) or URLs.

    Raises CredentialsError if nothing produced a credential.
    """
    scopes = resolve_scopes(config.get('scopes', None) or DEFAULT_SCOPES)
    if not scopes:
        raise CredentialsError("no valid scopes requested")

    key_file = config.get('service_account', None)
    if key_file:
        creds = service_account.Credentials.from_service_account_file(str(key_file), scopes=scopes)
        subject = config.get('subject', None)
        if subject:
            creds = creds.with_subject(str(subject))
        logger.info("using service account credentials from %s", key_file)
        return creds

    cache = Path(config.get('cache', None) or DEFAULT_CACHE)
    creds = _from_token_cache(cache, scopes)
    if creds is not None:
        logger.info("using cached user credentials from %s", cache)
        return creds

    secrets = Path(config.get('secrets', None) or DEFAULT_SECRETS)
    if secrets.exists() and secrets.is_file():
        flow = InstalledAppFlow.from_client_secrets_file(str(secrets), scopes)
        creds = flow.run_local_server(host=config.get('server', 'localhost'),
                                      port=int(config.get('port', 0)),
                                      authorization_prompt_message=config.get('auth_prompt_msg', DEFAULT_AUTH_PROMPT_MSG),
                                      success_message=config.get('flow_success_msg', DEFAULT_AUTH_FLOW_SUCCESS_MSG))
        _save_token_cache(cache, creds, scopes)
        logger.info("authorized via OAuth flow, token cached at %s", cache)
        return creds

    # final hail mary
    try:
        creds, _ = google.auth.default(scopes=scopes)
    except google.auth.exceptions.DefaultCredentialsError as e:
        raise CredentialsError(f"no credentials available: {e}") from e
    logger.warning("falling back to application default credentials")
    return creds

class GoogleSheetsSession():
    """
    Authenticated access to the Sheets and Drive services.
    Owned by the caller: build one, pass it to every operation and the
    credential and discovery services are reused across calls.
    Services are built lazily and connecting happens on first use.
    """

    _CREDENTIAL_KEYS = ('secrets', 'cache', 'service_account', 'subject', 'scopes')

    def __init__(self, config: dict|None = None, credentials=None) -> None:
        """
        config is the map handed to build_credential().  Pre-built credentials
        can be supplied instead, in which case config is only consulted
        for the developer key.
        """
        self._config = dict(config or {})
        self._creds = credentials
        self._services = {}
        self._discovery_cache = gws_discovery_cache.autodetect()

    @classmethod
    def from_file(cls, path: Path|str):
        """Load the configuration map from a JSON file"""
        with open(Path(path), 'r', encoding='utf-8') as f:
            return cls(json.load(f))

    def __bool__(self) -> bool:
        """True if we are connected and authenticated"""
        return self.connected

    def __str__(self) -> str:
        if self.connected:
            return f"Connected:{str(self.session_scopes)}"
        return f"Disconnected:{str(self.scopes)}"

    def __repr__(self) -> str:
        return f"{str(self.__class__)}:{str(self)}"

    @property
    def connected(self) -> bool:
        """
        Are we authenticated with Google?
        """
        return bool(self._creds) and bool(self._creds.valid)

    @property
    def creds(self):
        """Current access credentials or None"""
        return self._creds

    @property
    def scopes(self) -> list[str]:
        """
        The scopes requested or to be requested on next authentication sequence.
        """
        return resolve_scopes(self._config.get('scopes', None) or DEFAULT_SCOPES)

    @property
    def session_scopes(self) -> list[str]:
        """
        Scopes on the current credential, which can differ from what was requested.
        """
        if self.connected:
            return list(getattr(self._creds, 'scopes', None) or [])
        return []

    @property
    def services(self) -> dict:
        """Currently built services, keyed by 'name:version'"""
        return self._services

    @property
    def config(self) -> dict:
        """
        Get all configuration state as a dict.
        Convenience for pushing into a json file.
        """
        return copy.deepcopy(self._config)

    @config.setter
    def config(self, config: dict) -> None:
        """
        Merge in configuration state.  If anything that affects the credential
        changes, the credential and all built services are dropped and the
        next call reconnects.
        """
        reconnect = False
        for k, v in dict(config).items():
            if v is None:
                continue
            if self._config.get(k, None) != v:
                self._config[k] = v
                if k in self._CREDENTIAL_KEYS:
                    reconnect = True
                elif k == 'developer_key':
                    self._services = {}
        if reconnect:
            self.clear()

    def clear(self) -> None:
        """Drop the credential and built services."""
        self._creds = None
        self._services = {}

    def connect(self) -> bool:
        """
        Establish a new authentication session.
        Anything the credential builder raises propagates.
        """
        self.clear()
        self._creds = build_credential(self._config)
        return self.connected

    def get_service(self, name: str, version: str) -> Resource:
        """
        Build the requested service if not already available, connecting if required.
        """
        if self._creds is None:
            self.connect()
        id = f'{name}:{version}'
        s = self._services.get(id, None)
        if s is None:
            logger.debug("building %s service", id)
            s = build(name, version, credentials=self._creds,
                      developerKey=self._config.get('developer_key', None),
                      cache=self._discovery_cache)
            self._services[id] = s
        return s

    @property
    def sheets(self) -> Resource:
        return self.get_service("sheets", "v4")

    @property
    def drive(self) -> Resource:
        return self.get_service("drive", "v3")

def build_sheet_service(config: dict) -> GoogleSheetsSession:
    """
    Given a configuration map, build a connected session using the
    credentials the map describes.
    """
    session = GoogleSheetsSession(config)
    session.connect()
    return session

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional
from urllib.parse import quote

import requests

from wordnik_config import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    WordnikConfig,
    load_config,
    require_api_key,
)
from wordnik_errors import (
    ApiError,
    AuthenticationError,
    AuthenticationRequiredError,
    NetworkError,
    ValidationError,
)

logger = logging.getLogger(__name__)

SEARCH_DEFAULTS = {"caseSensitive": "true", "skip": 0, "limit": 10}
RANDOM_WORD_DEFAULTS = {"hasDictionaryDef": "true"}
WORD_LIST_WORDS_DEFAULTS = {"sortBy": "createDate", "sortOrder": "desc"}


def require_text(value: Any, field: str, operation: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{operation} expects {field} to be a non-blank string")
    return value


def require_words(words: Any, operation: str) -> List[Any]:
    if words is None or isinstance(words, (str, bytes)):
        raise ValidationError(f"{operation} expects words to be a list of words")
    try:
        words = list(words)
    except TypeError as exc:
        raise ValidationError(
            f"{operation} expects words to be a list of words"
        ) from exc
    for word in words:
        require_text(word, "each word", operation)
    return words


def encode_path_segment(value: str) -> str:
    return quote(value, safe="")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def apply_defaults(params: Mapping[str, Any], defaults: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(params)
    for key, default in defaults.items():
        if _is_blank(merged.get(key)):
            merged[key] = default
    return merged


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(item) for item in value]
    return value


def build_query(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        key: _query_value(value)
        for key, value in params.items()
        if value is not None
    }


def make_request_body(words: Iterable[Any]) -> List[Dict[str, Any]]:
    return [{"word": word} for word in words]


def _server_message(response: requests.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        text = response.text.strip()
        return text or None
    if isinstance(payload, dict):
        message = payload.get("message")
        if message:
            return str(message)
    return None


class WordnikClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = require_api_key(api_key)
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._token: Optional[str] = None
        self._token_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        config: Optional[WordnikConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> "WordnikClient":
        if config is None:
            config = load_config()
        return cls(
            config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            session=session,
        )

    @property
    def is_authenticated(self) -> bool:
        return self._current_token() is not None

    def _current_token(self) -> Optional[str]:
        with self._token_lock:
            return self._token

    def _ensure_authenticated(self, operation: str) -> None:
        if self._current_token() is None:
            raise AuthenticationRequiredError(operation)

    # Account

    def authenticate(self, username: str, password: str) -> Any:
        require_text(username, "username", "authenticate")
        require_text(password, "password", "authenticate")
        path = f"/account.json/authenticate/{encode_path_segment(username)}"
        auth_info = self._call_api(path, {"password": password})
        token = auth_info.get("token") if isinstance(auth_info, dict) else None
        if not token:
            raise AuthenticationError(
                f"{self.base_url}{path}", "no session token was returned"
            )
        with self._token_lock:
            self._token = str(token)
        logger.info("Authenticated Wordnik user %s", username)
        return auth_info

    def get_api_token_status(self) -> Any:
        return self._call_api("/account.json/apiTokenStatus")

    def get_user(self) -> Any:
        self._ensure_authenticated("get_user")
        return self._call_api("/account.json/user")

    def get_word_lists(self, **params: Any) -> Any:
        self._ensure_authenticated("get_word_lists")
        return self._call_api("/account.json/wordLists", params)

    # Word

    def _word_call(
        self,
        operation: str,
        word: str,
        suffix: str,
        params: Mapping[str, Any],
    ) -> Any:
        require_text(word, "word", operation)
        path = f"/word.json/{encode_path_segment(word)}{suffix}"
        return self._call_api(path, params)

    def get_word(self, word: str, **params: Any) -> Any:
        return self._word_call("get_word", word, "", params)

    def get_definitions(self, word: str, **params: Any) -> Any:
        return self._word_call("get_definitions", word, "/definitions", params)

    def get_examples(self, word: str, **params: Any) -> Any:
        return self._word_call("get_examples", word, "/examples", params)

    def get_top_example(self, word: str, **params: Any) -> Any:
        return self._word_call("get_top_example", word, "/topExample", params)

    def get_text_pronunciations(self, word: str, **params: Any) -> Any:
        return self._word_call(
            "get_text_pronunciations", word, "/pronunciations", params
        )

    def get_hyphenation(self, word: str, **params: Any) -> Any:
        return self._word_call("get_hyphenation", word, "/hyphenation", params)

    def get_frequency(self, word: str, **params: Any) -> Any:
        return self._word_call("get_frequency", word, "/frequency", params)

    def get_phrases(self, word: str, **params: Any) -> Any:
        return self._word_call("get_phrases", word, "/phrases", params)

    def get_related_words(self, word: str, **params: Any) -> Any:
        return self._word_call("get_related_words", word, "/related", params)

    def get_audio(self, word: str, **params: Any) -> Any:
        return self._word_call("get_audio", word, "/audio", params)

    # Words

    def search_words(self, query: str, **params: Any) -> Any:
        require_text(query, "query", "search_words")
        path = f"/words.json/search/{encode_path_segment(query)}"
        return self._call_api(path, apply_defaults(params, SEARCH_DEFAULTS))

    def get_word_of_the_day(self, **params: Any) -> Any:
        return self._call_api("/words.json/wordOfTheDay", params)

    def get_random_words(self, **params: Any) -> Any:
        return self._call_api("/words.json/randomWords", params)

    def get_random_word(self, **params: Any) -> Any:
        return self._call_api(
            "/words.json/randomWord", apply_defaults(params, RANDOM_WORD_DEFAULTS)
        )

    # Word lists

    def _word_list_path(self, operation: str, word_list_id: str) -> str:
        require_text(word_list_id, "word_list_id", operation)
        return f"/wordList.json/{encode_path_segment(word_list_id)}"

    def get_word_list(self, word_list_id: str, **params: Any) -> Any:
        path = self._word_list_path("get_word_list", word_list_id)
        self._ensure_authenticated("get_word_list")
        return self._call_api(path, params)

    def get_word_list_words(self, word_list_id: str, **params: Any) -> Any:
        path = self._word_list_path("get_word_list_words", word_list_id)
        self._ensure_authenticated("get_word_list_words")
        return self._call_api(
            f"{path}/words", apply_defaults(params, WORD_LIST_WORDS_DEFAULTS)
        )

    def add_words_to_list(self, word_list_id: str, words: Iterable[str]) -> Any:
        path = self._word_list_path("add_words_to_list", word_list_id)
        words = require_words(words, "add_words_to_list")
        self._ensure_authenticated("add_words_to_list")
        return self._call_api(
            f"{path}/words", method="POST", body=make_request_body(words)
        )

    def update_list(self, word_list_id: str, words: Iterable[str]) -> Any:
        path = self._word_list_path("update_list", word_list_id)
        words = require_words(words, "update_list")
        self._ensure_authenticated("update_list")
        return self._call_api(path, method="PUT", body=make_request_body(words))

    def delete_list(self, word_list_id: str) -> Any:
        path = self._word_list_path("delete_list", word_list_id)
        self._ensure_authenticated("delete_list")
        return self._call_api(path, method="DELETE")

    # Transport

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "Content-type": "application/json",
            "api_key": self.api_key,
        }
        token = self._current_token()
        if token is not None:
            headers["auth_token"] = token
        return headers

    def _call_api(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        method: str = "GET",
        body: Optional[List[Dict[str, Any]]] = None,
    ) -> Any:
        # url carries no query string so passwords never reach logs or errors
        url = f"{self.base_url}{path}"
        method = method.upper()
        query = build_query(params or {})
        data = None
        if method in ("POST", "PUT"):
            data = json.dumps(body if body is not None else []).encode("utf-8")

        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                params=query or None,
                data=data,
                headers=self._build_headers(),
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise NetworkError(
                f"TIMEOUT: api call to {url} took more than {self.timeout}s to return"
            ) from exc
        except requests.ConnectionError as exc:
            logger.warning("%s %s could not connect: %s", method, url, exc)
            raise NetworkError(f"Can't connect to the api: {url}") from exc
        except requests.RequestException as exc:
            logger.warning("%s %s request error: %s", method, url, exc)
            raise NetworkError(f"request error: {exc}") from exc

        return self._handle_response(method, url, response)

    def _handle_response(
        self, method: str, url: str, response: requests.Response
    ) -> Any:
        status = response.status_code
        if status == 200:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                logger.warning("%s %s returned a non-json body", method, url)
                raise ApiError(url, status, "non-json response") from exc
        if status == 401:
            message = _server_message(response)
            logger.warning("%s %s was unauthorized: %s", method, url, message)
            raise AuthenticationError(url, message)
        if status == 404:
            logger.info("%s %s found no resource", method, url)
            return None
        logger.warning("%s %s failed with http %s", method, url, status)
        raise ApiError(url, status)

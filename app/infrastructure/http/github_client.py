"""
Cliente mínimo de la API REST de GitHub para listar repositorios públicos.

La configuración (credenciales OAuth app, URL base, timeout) se inyecta al construir
el cliente; no lee settings globales.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from app.core.errors import ErrorKind, UpstreamError

_log = logging.getLogger("devconnect.github")


@dataclass(frozen=True)
class GithubConfig:
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_url: str = "https://api.github.com"
    per_page: int = 5
    sort: str = "created:asc"
    timeout_seconds: Optional[float] = 10.0
    user_agent: str = "devconnector-profile-api"


class GithubProfileNotFound(UpstreamError):
    def __init__(self, username: str, status_code: int) -> None:
        super().__init__(ErrorKind.NOT_FOUND, f"GitHub respondió {status_code} para '{username}'")
        self.username = username
        self.status_code = status_code


class GithubClient:
    def __init__(self, config: GithubConfig, session: Optional[requests.Session] = None) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"per_page": self.config.per_page, "sort": self.config.sort}
        if self.config.client_id and self.config.client_secret:
            params["client_id"] = self.config.client_id
            params["client_secret"] = self.config.client_secret
        return params

    def list_repos(self, username: str) -> Any:
        """
        Lista hasta `per_page` repos del usuario (creación ascendente).

        - Cualquier status != 200 -> GithubProfileNotFound (se descarta el status real).
        - Error de red o cuerpo no-JSON -> UpstreamError(TRANSPORT).
        Devuelve el JSON de GitHub sin modificar.
        """
        url = f"{self.config.api_url.rstrip('/')}/users/{requests.utils.quote(username, safe='')}/repos"
        try:
            r = self.session.get(
                url,
                params=self._params(),
                headers={"User-Agent": self.config.user_agent, "Accept": "application/vnd.github+json"},
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            _log.error("GitHub inaccesible username=%s: %s", username, e)
            raise UpstreamError(ErrorKind.TRANSPORT, str(e)) from e

        if r.status_code != 200:
            _log.info("GitHub status=%s username=%s", r.status_code, username)
            raise GithubProfileNotFound(username, r.status_code)

        try:
            return r.json()
        except ValueError as e:
            _log.error("Respuesta de GitHub no es JSON username=%s: %s", username, e)
            raise UpstreamError(ErrorKind.TRANSPORT, "Respuesta inválida de GitHub") from e

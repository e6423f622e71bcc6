"""
IndexNow Client - search engine notifications for changed job pages

IndexNow (Bing, Yandex, ...) accepts up to 10,000 URLs per request; we
send smaller batches so one rejected batch does not drop everything.

Usage:
    client = IndexNowClient.from_settings(get_settings())
    client.submit_slugs(["rn-icu-cleveland-123"], action="delete")
"""

import logging
from typing import List, Optional
from urllib.parse import urlparse

import httpx

from jobboard.config import Settings

logger = logging.getLogger(__name__)

ACCEPTED_STATUS_CODES = (200, 202)


class IndexNowClient:
    def __init__(
        self,
        site_url: str,
        job_path_prefix: str = "/jobs/nursing",
        api_url: str = "https://api.indexnow.org/indexnow",
        key: str = "",
        batch_size: int = 1000,
        http_client: Optional[httpx.Client] = None,
    ):
        self.site_url = site_url.rstrip("/")
        self.job_path_prefix = "/" + job_path_prefix.strip("/")
        self.api_url = api_url
        self.key = key
        self.batch_size = batch_size
        self.http_client = http_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "IndexNowClient":
        return cls(
            site_url=settings.site_url,
            job_path_prefix=settings.job_path_prefix,
            api_url=settings.indexnow_api_url,
            key=settings.indexnow_key,
            batch_size=settings.indexnow_batch_size,
        )

    def job_url(self, slug: str) -> str:
        return f"{self.site_url}{self.job_path_prefix}/{slug}"

    def submit_slugs(self, slugs: List[str], action: str = "update") -> bool:
        urls = [self.job_url(slug) for slug in slugs if slug]
        return self.submit_urls(urls, action)

    def submit_urls(self, urls: List[str], action: str = "update") -> bool:
        """
        Submit URLs in batches.

        IndexNow does not distinguish updates from deletions; the action
        is only logged.

        Returns:
            True if at least one batch was accepted
        """
        if not urls:
            return False

        client = self.http_client or httpx.Client(timeout=30.0)
        results = []
        try:
            for start in range(0, len(urls), self.batch_size):
                batch = urls[start:start + self.batch_size]
                results.append(self._submit_batch(client, batch, action))
        finally:
            if self.http_client is None:
                client.close()

        return any(results)

    def _submit_batch(self, client: httpx.Client, batch: List[str], action: str) -> bool:
        payload = {
            "host": urlparse(self.site_url).hostname,
            "urlList": batch,
        }
        if self.key:
            payload["key"] = self.key
            payload["keyLocation"] = f"{self.site_url}/{self.key}.txt"

        try:
            response = client.post(self.api_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"IndexNow: error submitting batch: {e}")
            return False

        if response.status_code in ACCEPTED_STATUS_CODES:
            logger.info(f"IndexNow: notified about {len(batch)} URLs ({action})")
            return True

        logger.warning(
            f"IndexNow: failed to submit batch (status {response.status_code}): {response.text}"
        )
        return False

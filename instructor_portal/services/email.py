"""Email dispatch through Amazon SES."""

import json
import logging
import re
from html.parser import HTMLParser
from typing import Any

import boto3
from botocore.config import Config

from .secrets import SecretsCache

log = logging.getLogger(__name__)

SES_CONFIGURATION_SET_NAME = "lessons"
CHARSET = "UTF-8"


class _TextExtractor(HTMLParser):
    skipped_tags = {"head", "script", "style", "title"}

    def __init__(self) -> None:
        super().__init__()
        self.parts: list[str] = []
        self._skipping = 0

    def handle_starttag(self, tag: str, attrs: Any) -> None:
        if tag in self.skipped_tags:
            self._skipping += 1

    def handle_endtag(self, tag: str) -> None:
        if tag in self.skipped_tags and self._skipping:
            self._skipping -= 1

    def handle_data(self, data: str) -> None:
        if not self._skipping:
            self.parts.append(data)


def html_to_text(html: str) -> str:
    """Return the visible text of an HTML body with whitespace collapsed."""
    parser = _TextExtractor()
    parser.feed(html)
    parser.close()
    return re.sub(r"\s+", " ", "".join(parser.parts)).strip()


class SimpleEmailService:
    """Send plain and templated emails from the portal sender address."""

    def __init__(
        self,
        secrets: SecretsCache,
        client: Any = None,
        *,
        sender: str | None = None,
        region: str = "us-west-2",
    ) -> None:
        self.secrets = secrets
        self.client = client or boto3.client(
            "ses",
            region_name=region,
            config=Config(retries={"max_attempts": 5, "mode": "standard"}),
        )
        self.sender = sender

    def set_sender(self, sender: str) -> None:
        self.sender = sender

    def init(self) -> "SimpleEmailService":
        shared_secrets = self.secrets.get_shared_secrets()
        if self.sender is None and shared_secrets.get("SES_SENDER"):
            self.set_sender(shared_secrets["SES_SENDER"])
        return self

    def build_email_params(self, to: list[str], **merging_params: Any) -> dict[str, Any]:
        return {
            "Source": self.sender,
            "Destination": {"ToAddresses": list(to)},
            "ConfigurationSetName": SES_CONFIGURATION_SET_NAME,
            **merging_params,
        }

    def send_email(
        self,
        to: list[str],
        subject: str,
        html: str | None = None,
        text: str | None = None,
    ) -> dict[str, Any]:
        """Send an email; the text body defaults to the text of ``html``."""
        self.init()
        body: dict[str, Any] = {}
        if html is not None:
            body["Html"] = {"Charset": CHARSET, "Data": html}
        if text is None and html is not None:
            text = html_to_text(html)
        if text is not None:
            body["Text"] = {"Charset": CHARSET, "Data": text}
        params = self.build_email_params(
            to,
            Message={"Subject": {"Charset": CHARSET, "Data": subject}, "Body": body},
        )
        log.info(json.dumps({"params": params}, indent=2))
        return self.client.send_email(**params)

    def send_template_email(
        self, to: list[str], template_name: str, template_data: dict[str, Any]
    ) -> dict[str, Any]:
        """Send an SES template email rendered with ``template_data``."""
        self.init()
        params = self.build_email_params(
            to,
            Template=template_name,
            # injectScript is the live-reload hook of the template previewer
            TemplateData=json.dumps({**template_data, "injectScript": ""}),
        )
        log.info(json.dumps({"params": params}, indent=2))
        return self.client.send_templated_email(**params)


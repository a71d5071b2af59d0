"""The configuration checks.

Each check is a small class whose ``evaluate`` looks at an
``EnvironmentSnapshot`` and returns a ``Finding`` or ``None``. Checks are
independent of each other; list order only decides display order.
"""

from __future__ import annotations

import ipaddress
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from ..request_gate import RequestGate
from ..utils.filesystem import probe_round_trip
from .models import SEVERITY_NOTICE, SEVERITY_URGENT, Finding, Notice
from .snapshot import EnvironmentSnapshot

logger = logging.getLogger(__name__)

DEFAULT_DEV_DOMAINS: Tuple[str, ...] = (
    ".dev",
    "dev.",
    "devel.",
    "development.",
    "test.",
    ".test",
    "new.",
    ".new",
    "localhost",
    ".local",
    "local.",
)

THUMBS_PROBE_PAYLOAD = "ok"


class Check:
    """Base class for a single configuration check."""

    name = "check"

    def evaluate(self, snapshot: EnvironmentSnapshot) -> Optional[Finding]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class MailConfigCheck(Check):
    """No mail transport is configured; nudge people who can fix it."""

    name = "mail_config"

    def evaluate(self, snapshot):
        if snapshot.mail_configured:
            return None
        if not (snapshot.user_authenticated and snapshot.user_can_manage_config):
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The <strong>mail configuration parameters</strong> have not been set up. "
            "This may interfere with password resets, and extension functionality. "
            "Please set up the <tt>mailoptions</tt> in <tt>settings.json</tt>.",
        ))


class DevelopmentVersionCheck(Check):
    name = "development_version"

    def evaluate(self, snapshot):
        if snapshot.stable_release:
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "This is a <strong>development version</strong>, so it might contain bugs "
            "and unfinished features. Use at your own risk!",
            "For 'production' websites, we advise you to stick with the official stable releases.",
        ))


class LiveDebugCheck(Check):
    """Debug mode is on, but the host does not look like a dev machine."""

    name = "live_debug"

    @staticmethod
    def dev_domains(configured) -> List[str]:
        merged: List[str] = []
        for partial in list(configured) + list(DEFAULT_DEV_DOMAINS):
            if partial not in merged:
                merged.append(partial)
        return merged

    def evaluate(self, snapshot):
        if not snapshot.debug:
            return None
        host = snapshot.host
        for partial in self.dev_domains(snapshot.debug_local_domains):
            if partial in host:
                return None
        return Finding(Notice(
            SEVERITY_URGENT,
            "It seems like this website is running on a <strong>non-development environment</strong>, "
            "while 'debug' is enabled. Make sure debug is disabled in production environments. "
            "If you don't do this, it will leak stack traces to visitors and result in "
            "a measurable reduced performance across all pages.",
            "If you wish to hide this message, add a key to your <tt>settings.json</tt> with a "
            "(partial) domain name in it, that should be seen as a development environment: "
            "<tt>\"debug_local_domains\": [\".foo\"]</tt>.",
        ))


class SingleHostnameCheck(Check):
    """Hosts without a TLD (``localhost``) upset session cookies in some browsers."""

    name = "single_hostname"

    def evaluate(self, snapshot):
        hostname = snapshot.host
        if "." in hostname:
            return None
        notice = Notice(
            SEVERITY_NOTICE,
            f"You are using <tt>{hostname}</tt> as host name. Some browsers have problems "
            "with sessions on hostnames that do not have a <tt>.tld</tt> in them.",
            "If you experience difficulties logging on, either configure your webserver to "
            "use a hostname with a dot in it, or use another browser.",
        )
        return Finding(notice, escalate=RequestGate.escalates(snapshot.route))


def _is_ip_address(host: str) -> bool:
    candidate = host
    if candidate.startswith("[") and candidate.endswith("]"):
        candidate = candidate[1:-1]
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return False
    return True


class IpAddressCheck(Check):
    name = "ip_address"

    def evaluate(self, snapshot):
        hostname = snapshot.host
        if not _is_ip_address(hostname):
            return None
        notice = Notice(
            SEVERITY_NOTICE,
            f"You are using the <strong>IP address</strong> <tt>{hostname}</tt> as host name. "
            "This is known to cause problems with sessions.",
            "If you experience difficulties logging on, either configure your webserver to "
            "use a proper hostname, or use another browser.",
        )
        return Finding(notice, escalate=RequestGate.escalates(snapshot.route))


class TopLevelCheck(Check):
    """The application is mounted under a subfolder instead of the web root."""

    name = "top_level"

    def evaluate(self, snapshot):
        if not snapshot.base_path:
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "You are running the application in a subfolder, instead of the webroot.",
            "It is recommended to serve it from the 'web root', so that it is in the top level. "
            "If you wish to use it for only part of a website, we recommend setting up a "
            "subdomain like <tt>news.example.org</tt>.",
        ))


class ImagingLibraryCheck(Check):
    """Pillow is needed to generate thumbnails."""

    name = "imaging_library"

    def evaluate(self, snapshot):
        if snapshot.capabilities.function_exists("PIL.Image", "new"):
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The current Python environment doesn't have the <strong>Pillow imaging library</strong> "
            "installed. Without this, thumbnails can not be generated. Please install "
            "<tt>Pillow</tt>, or ask your system-administrator to do so.",
        ))


class ThumbsFolderCheck(Check):
    """When thumbnails are saved to disk, ``thumbs/`` must be writable."""

    name = "thumbs_folder"

    @staticmethod
    def probe_path(now: Optional[datetime] = None) -> str:
        stamp = (now or datetime.now()).strftime("%Y-%m-%d-%H-%M-%S-%f")
        return f"/thumbs/configtester_{stamp}.txt"

    def evaluate(self, snapshot):
        if not snapshot.thumbnails_save_files:
            return None

        if snapshot.filesystem is None:
            ok = False
        else:
            result = probe_round_trip(snapshot.filesystem, self.probe_path(), THUMBS_PROBE_PAYLOAD)
            ok = result.ok
            if not ok:
                logger.info("Thumbs folder probe failed: %s", result.error)

        if ok:
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The site is configured to save thumbnails to disk for performance, but the "
            "<tt>thumbs/</tt> folder doesn't seem to be writable.",
            "Make sure the folder exists, and is writable to the webserver.",
        ))


class ExifSupportCheck(Check):
    name = "exif_support"

    def evaluate(self, snapshot):
        caps = snapshot.capabilities
        if caps.module_available("PIL.ExifTags") and caps.class_exists("PIL.Image", "Exif"):
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The class <tt>PIL.Image.Exif</tt> does not exist, which means that thumbnail "
            "images can not be oriented correctly.",
            "Make sure a recent <tt>Pillow</tt> release is installed in your Python environment. "
            "See <a href='https://pillow.readthedocs.io/en/stable/installation.html'>here</a>.",
        ))


class MimeDetectionCheck(Check):
    name = "mime_detection"

    def evaluate(self, snapshot):
        caps = snapshot.capabilities
        if caps.module_available("magic") and caps.class_exists("magic", "Magic"):
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The class <tt>magic.Magic</tt> does not exist, which means that uploaded files "
            "can not be type-checked for thumbnail images.",
            "Make sure <tt>python-magic</tt> and the <tt>libmagic</tt> system library are installed. "
            "See <a href='https://github.com/ahupp/python-magic#installation'>here</a>.",
        ))


class ImagingInfoCheck(Check):
    name = "imaging_info"

    def evaluate(self, snapshot):
        caps = snapshot.capabilities
        if caps.module_available("PIL.features") and caps.function_exists("PIL.features", "pilinfo"):
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The function <tt>PIL.features.pilinfo</tt> does not exist, which means that "
            "thumbnail images can not be created.",
            "Make sure <tt>Pillow</tt> is installed with its optional features compiled in. "
            "See <a href='https://pillow.readthedocs.io/en/stable/installation.html'>here</a>.",
        ))


class MaintenanceModeCheck(Check):
    """Maintenance mode hides the site from anonymous visitors; say so on the dashboard."""

    name = "maintenance_mode"

    def evaluate(self, snapshot):
        if not snapshot.maintenance_mode:
            return None
        return Finding(Notice(
            SEVERITY_NOTICE,
            "The <strong>maintenance mode</strong> is enabled. This means that "
            "non-authenticated users will not be able to see the website.",
            "To make the site available to the general public again, set "
            "<tt>\"maintenance_mode\": false</tt> in your <tt>settings.json</tt> file.",
        ))


def default_checks() -> Tuple[Check, ...]:
    """All checks, in display order."""
    return (
        MailConfigCheck(),
        DevelopmentVersionCheck(),
        LiveDebugCheck(),
        SingleHostnameCheck(),
        IpAddressCheck(),
        TopLevelCheck(),
        ImagingLibraryCheck(),
        ThumbsFolderCheck(),
        ExifSupportCheck(),
        MimeDetectionCheck(),
        ImagingInfoCheck(),
        MaintenanceModeCheck(),
    )


__all__ = [
    "DEFAULT_DEV_DOMAINS",
    "THUMBS_PROBE_PAYLOAD",
    "Check",
    "MailConfigCheck",
    "DevelopmentVersionCheck",
    "LiveDebugCheck",
    "SingleHostnameCheck",
    "IpAddressCheck",
    "TopLevelCheck",
    "ImagingLibraryCheck",
    "ThumbsFolderCheck",
    "ExifSupportCheck",
    "MimeDetectionCheck",
    "ImagingInfoCheck",
    "MaintenanceModeCheck",
    "default_checks",
]

"""Weekly certificate renewal: renew-ssl.sh plus its cron entry."""

from __future__ import annotations

from wpssl_common import SetupParameters, TargetEnvironment
from wpssl_common.config import get_config

from wpssl.services import cron, renderer
from wpssl.services.materializer import SCRIPT_MODE, write_file


def schedule_renewal(params: SetupParameters, target: TargetEnvironment) -> str:
    """Write the renewal script and append its cron line. Returns the line added.

    Re-running appends another identical line; entries are never deduplicated.
    """
    cfg = get_config()
    script = renderer.render_renewal_script(target, cfg.cert_live_dir(params.domain))
    write_file(target.renewal_script, script, mode=SCRIPT_MODE)

    line = cron.format_entry(cfg.renewal_schedule, target.renewal_script)
    cron.append_entry(line)
    return line

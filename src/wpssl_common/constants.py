"""Shared constants for wpssl."""

from pathlib import Path

# Site layout
SITES_ROOT = Path("/var/www")
SSL_DIR = "ssl"
APACHE_CONF_DIR = "apache-conf"
BACKUPS_DIR = "backups"
COMPOSE_FILE = "docker-compose.yml"
HELPER_SCRIPTS = ("start.sh", "stop.sh", "restart.sh", "backup.sh")
RENEWAL_SCRIPT = "renew-ssl.sh"

# Ports claimed by the composed services
HTTP_PORT = 80
HTTPS_PORT = 443
PHPMYADMIN_PORT = 8080
REQUIRED_PORTS = (HTTP_PORT, HTTPS_PORT, PHPMYADMIN_PORT)

# Certbot
LETSENCRYPT_LIVE_DIR = Path("/etc/letsencrypt/live")
CERT_FILES = {
    "fullchain.pem": "certificate.crt",
    "privkey.pem": "private.key",
    "chain.pem": "ca_bundle.crt",
}

# Weekly renewal: Mondays at 03:00
RENEWAL_SCHEDULE = "0 3 * * 1"

# Docker
DOCKER_GROUP = "docker"
COMPOSE_RELEASES_API = "https://api.github.com/repos/docker/compose/releases/latest"
COMPOSE_DOWNLOAD_URL = "https://github.com/docker/compose/releases/download/{tag}/docker-compose-{system}-{machine}"
COMPOSE_BINARY = Path("/usr/local/bin/docker-compose")
COMPOSE_SYMLINK = Path("/usr/bin/docker-compose")

# Setup run journal
LOG_DIR = Path("/var/log/wpssl")
JOURNAL_FILE = "setup-runs.jsonl"
JOURNAL_DB_PATH = Path("/var/lib/wpssl/setup-runs.db")

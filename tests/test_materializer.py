"""Tests for artifact rendering and site materialization."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from pydantic import SecretStr

from wpssl_common import SetupParameters, TargetEnvironment
from wpssl.services import renderer
from wpssl.services.materializer import materialize

EXPECTED_FILES = {
    "apache-conf/default-ssl.conf",
    "apache-conf/000-default.conf",
    "Dockerfile",
    "docker-compose.yml",
    "start.sh",
    "stop.sh",
    "restart.sh",
    "backup.sh",
}


def _snapshot(root: Path) -> dict[str, bytes]:
    return {
        str(p.relative_to(root)): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


class TestRenderer:
    def test_ssl_vhost(self, params: SetupParameters):
        config = renderer.render_ssl_vhost(params)
        assert "<VirtualHost *:443>" in config
        assert "ServerAdmin webmaster@example.com" in config
        assert "ServerName example.com" in config
        assert "ServerAlias www.example.com" in config
        assert "SSLCertificateFile /etc/apache2/ssl/certificate.crt" in config
        assert "SSLCertificateKeyFile /etc/apache2/ssl/private.key" in config
        assert "SSLCertificateChainFile /etc/apache2/ssl/ca_bundle.crt" in config
        assert "ErrorLog ${APACHE_LOG_DIR}/error.log" in config

    def test_http_vhost_redirects(self, params: SetupParameters):
        config = renderer.render_http_vhost(params)
        assert "<VirtualHost *:80>" in config
        assert "ServerName example.com" in config
        assert "RewriteCond %{HTTPS} off" in config
        assert "RewriteRule ^ https://%{HTTP_HOST}%{REQUEST_URI} [L,R=301]" in config

    def test_dockerfile(self):
        dockerfile = renderer.render_dockerfile(TargetEnvironment(base_dir=Path("/var/www/mysite")))
        assert dockerfile.startswith("FROM wordpress:latest\n")
        assert "COPY apache-conf/default-ssl.conf /etc/apache2/sites-available/" in dockerfile
        assert "COPY apache-conf/000-default.conf /etc/apache2/sites-available/" in dockerfile
        assert "a2enmod ssl && a2enmod rewrite" in dockerfile
        assert "RUN a2ensite default-ssl" in dockerfile
        assert "upload_max_filesize = 64M" in dockerfile
        assert "EXPOSE 443" in dockerfile

    def test_compose(self, params: SetupParameters):
        compose = renderer.render_compose(params)
        assert 'WORDPRESS_DB_USER: "wpuser"' in compose
        assert 'WORDPRESS_DB_PASSWORD: "s3cret"' in compose
        assert 'WORDPRESS_DB_NAME: "wordpress"' in compose
        assert 'MYSQL_PASSWORD: "s3cret"' in compose
        assert "image: mysql:8.0" in compose
        assert "image: phpmyadmin/phpmyadmin" in compose
        for mapping in ('"80:80"', '"443:443"', '"8080:80"'):
            assert mapping in compose
        assert "wordpress_data:" in compose
        assert "db_data:" in compose
        assert "wordpress_network:" in compose

    def test_compose_escapes_special_characters(self):
        p = SetupParameters(
            domain="example.com",
            email="a@b.co",
            db_user="wp",
            db_password=SecretStr('pa$s: "x"'),
            db_name="wp",
            site_name="s",
        )
        compose = renderer.render_compose(p)
        assert 'WORDPRESS_DB_PASSWORD: "pa$$s: \\"x\\""' in compose

    def test_scripts_reference_base_dir(self, params: SetupParameters):
        target = TargetEnvironment(base_dir=Path("/var/www/mysite"))
        start = renderer.render_script("start.sh", params, target)
        assert start.startswith("#!/bin/bash\n")
        assert "COMPOSE_FILE=/var/www/mysite/docker-compose.yml" in start
        assert '$COMPOSE -f "$COMPOSE_FILE" up -d' in start
        assert '$COMPOSE -f "$COMPOSE_FILE" down' in renderer.render_script("stop.sh", params, target)
        assert '$COMPOSE -f "$COMPOSE_FILE" restart' in renderer.render_script("restart.sh", params, target)

    def test_backup_script(self, params: SetupParameters):
        target = TargetEnvironment(base_dir=Path("/var/www/mysite"))
        backup = renderer.render_script("backup.sh", params, target)
        assert "BACKUP_DIR=/var/www/mysite/backups" in backup
        assert 'TIMESTAMP=$(date +"%Y%m%d-%H%M%S")' in backup
        assert "mysqldump -uwpuser -ps3cret wordpress" in backup
        assert "wordpress-files-$TIMESTAMP.tar.gz" in backup
        assert "wordpress-db-$TIMESTAMP.sql" in backup

    def test_paths_with_spaces_are_quoted(self, params: SetupParameters):
        target = TargetEnvironment(base_dir=Path("/var/www/my site"))
        start = renderer.render_script("start.sh", params, target)
        assert "COMPOSE_FILE='/var/www/my site/docker-compose.yml'" in start

    def test_renewal_script(self):
        target = TargetEnvironment(base_dir=Path("/var/www/mysite"))
        script = renderer.render_renewal_script(target, Path("/etc/letsencrypt/live/example.com"))
        assert "certbot renew --quiet" in script
        assert "LIVE_DIR=/etc/letsencrypt/live/example.com" in script
        assert "SSL_DIR=/var/www/mysite/ssl" in script
        assert 'cp "$LIVE_DIR/privkey.pem" "$SSL_DIR/private.key"' in script
        assert 'chmod 600 "$SSL_DIR/private.key"' in script
        assert 'chmod 644 "$SSL_DIR/certificate.crt"' in script
        assert '$COMPOSE -f "$COMPOSE_FILE" restart wordpress' in script
        assert "restart db" not in script


class TestMaterialize:
    def test_creates_layout(self, tmp_path: Path, params: SetupParameters):
        base = tmp_path / "mysite"
        target = materialize(params, base)

        assert target.base_dir == base
        assert target.ssl_dir.is_dir()
        assert target.apache_conf_dir.is_dir()
        assert set(_snapshot(base)) == EXPECTED_FILES
        assert not target.backups_dir.exists()
        assert not target.renewal_script.exists()

    def test_scripts_are_executable(self, tmp_path: Path, params: SetupParameters):
        target = materialize(params, tmp_path / "mysite")
        for script in target.helper_scripts:
            assert os.access(script, os.X_OK)
            assert stat.S_IMODE(script.stat().st_mode) == 0o755
        assert not os.access(target.compose_file, os.X_OK)

    def test_deterministic(self, tmp_path: Path, params: SetupParameters):
        first = tmp_path / "a" / "mysite"
        second = tmp_path / "b" / "mysite"
        materialize(params, first)
        materialize(params, second)

        a = _snapshot(first)
        b = _snapshot(second)
        # Only the baked-in absolute path differs between the two trees
        for name in a:
            assert a[name].replace(str(first).encode(), b"BASE") == b[name].replace(str(second).encode(), b"BASE")

    def test_rerun_is_byte_identical(self, tmp_path: Path, params: SetupParameters):
        base = tmp_path / "mysite"
        materialize(params, base)
        before = _snapshot(base)
        materialize(params, base)
        assert _snapshot(base) == before

    def test_overwrites_existing_files(self, tmp_path: Path, params: SetupParameters):
        base = tmp_path / "mysite"
        base.mkdir()
        (base / "docker-compose.yml").write_text("stale")
        (base / "notes.txt").write_text("keep me")
        materialize(params, base)
        assert "wordpress" in (base / "docker-compose.yml").read_text()
        assert (base / "notes.txt").read_text() == "keep me"

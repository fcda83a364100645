"""Tests for config_resolver - merging, defaults and validation."""

from dataclasses import fields

import pytest

from config import ResolvedConfig, ValidationError
from config_resolver import DEFAULTS, PUBLIC_JOB_IMAGE, ConfigResolver, resolve_config


class TestDefaults:
    """Defaults for optional fields."""

    def test_minimal_source_populates_defaults(self, source, which_all):
        """Only required fields given: every other field gets its default."""
        config = resolve_config(source, environ={}, which=which_all)

        assert config.project_name == 'proj1'
        assert config.cluster_name == 'c1'
        assert config.zone == 'us-central1-a'
        assert config.cluster_version == ''
        assert config.node_count == 3
        assert config.machine_type == 'n1-standard-1'
        assert config.docker_registry == 'gcr.io/proj1'
        assert config.docker_image_name == 'glusterfs-heketi-bootstrap'
        assert config.docker_image_version == '0.0.1'
        assert config.disk_filter == 'description~gfs-k8s-brick'

    def test_image_tag_uses_registry_name_version(self, source, which_all):
        config = resolve_config(source, environ={}, which=which_all)
        assert config.image_tag == 'gcr.io/proj1/glusterfs-heketi-bootstrap:0.0.1'

    def test_registry_override(self, source, which_all):
        config = resolve_config(source, environ={'DOCKER_REGISTRY': 'eu.gcr.io/other'},
                                which=which_all)
        assert config.docker_registry == 'eu.gcr.io/other'

    def test_defaults_come_from_resolved_config(self):
        """DEFAULTS mirrors the dataclass field defaults."""
        for f in fields(ResolvedConfig):
            if f.name in DEFAULTS:
                assert DEFAULTS[f.name] == f.default
        assert DEFAULTS['node_count'] == 3
        assert 'project_name' not in DEFAULTS


class TestManifestDir:
    """Manifest directory is fixed at resolve time."""

    def test_default_under_working_directory(self, source, which_all, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = resolve_config(source, environ={}, which=which_all)
        assert config.manifest_dir == str(tmp_path / 'generated-manifests')

    def test_env_overrides_source(self, source, which_all):
        source['manifest_dir'] = '/from/source'
        config = resolve_config(source, environ={'GFS_MANIFEST_DIR': '/from/env'},
                                which=which_all)
        assert config.manifest_dir == '/from/env'

    def test_source_value(self, source, which_all):
        source['manifest_dir'] = '/from/source'
        config = resolve_config(source, environ={}, which=which_all)
        assert config.manifest_dir == '/from/source'


class TestPrecedence:
    """Environment > config source > defaults."""

    def test_env_overrides_source(self, source, which_all):
        source['node_count'] = 4
        config = resolve_config(source, environ={'NODE_COUNT': '5'}, which=which_all)
        assert config.node_count == 5

    def test_source_overrides_default(self, source, which_all):
        source['machine_type'] = 'n1-standard-4'
        config = resolve_config(source, environ={}, which=which_all)
        assert config.machine_type == 'n1-standard-4'

    def test_required_fields_from_env(self, which_all):
        """Environment alone can supply the required fields."""
        env = {'PROJECT_NAME': 'p', 'CLUSTER_NAME': 'c', 'ZONE': 'z'}
        config = resolve_config({}, environ=env, which=which_all)
        assert (config.project_name, config.cluster_name, config.zone) == ('p', 'c', 'z')

    def test_empty_env_value_is_unset(self, source, which_all):
        config = resolve_config(source, environ={'MACHINE_TYPE': ''}, which=which_all)
        assert config.machine_type == 'n1-standard-1'


class TestJobImage:
    """Job image selection."""

    def test_fallback_image_without_name_override(self, source, which_all):
        config = resolve_config(source, environ={'DOCKER_IMAGE_VERSION': '9.9.9'},
                                which=which_all)
        assert config.job_image == PUBLIC_JOB_IMAGE

    def test_custom_image_from_env(self, which_all):
        env = {'DOCKER_IMAGE_NAME': 'custom', 'DOCKER_IMAGE_VERSION': '1.2.3'}
        config = resolve_config({'project_name': 'proj1', 'cluster_name': 'c1',
                                 'zone': 'us-central1-a'}, environ=env, which=which_all)
        assert config.job_image == 'gcr.io/proj1/custom:1.2.3'

    def test_custom_image_from_source(self, source, which_all):
        source['docker_image_name'] = 'mine'
        config = resolve_config(source, environ={}, which=which_all)
        assert config.job_image == 'gcr.io/proj1/mine:0.0.1'

    def test_has_image_override(self, source, which_all):
        resolver = ConfigResolver(source, environ={'DOCKER_IMAGE_NAME': 'x'}, which=which_all)
        assert resolver.has_image_override() is True
        resolver = ConfigResolver(source, environ={}, which=which_all)
        assert resolver.has_image_override() is False


class TestValidation:
    """Failures are accumulated and raised together."""

    def test_node_count_below_minimum(self, source, which_all):
        with pytest.raises(ValidationError) as exc_info:
            resolve_config(source, environ={'NODE_COUNT': '2'}, which=which_all)
        assert len(exc_info.value.errors) == 1
        assert 'at least 3' in exc_info.value.errors[0]

    def test_node_count_not_integer(self, source, which_all):
        with pytest.raises(ValidationError) as exc_info:
            resolve_config(source, environ={'NODE_COUNT': 'three'}, which=which_all)
        assert 'must be an integer' in exc_info.value.errors[0]

    def test_missing_required_fields_all_reported(self, which_all):
        with pytest.raises(ValidationError) as exc_info:
            resolve_config({}, environ={}, which=which_all)
        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any('project_name' in e for e in errors)
        assert any('cluster_name' in e for e in errors)
        assert any('zone' in e for e in errors)

    def test_missing_tools_reported_with_config_errors(self, source):
        """Tool checks do not short-circuit config checks."""
        with pytest.raises(ValidationError) as exc_info:
            resolve_config(source, environ={'NODE_COUNT': '1'}, which=lambda name: None)
        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any("'gcloud'" in e for e in errors)
        assert any("'kubectl'" in e for e in errors)
        assert any('node_count' in e for e in errors)

    def test_validation_error_is_config_error(self, which_all):
        from config import ConfigError
        with pytest.raises(ConfigError):
            resolve_config({}, environ={}, which=which_all)

    def test_whitespace_required_field_rejected(self, source, which_all):
        source['zone'] = '   '
        with pytest.raises(ValidationError):
            resolve_config(source, environ={}, which=which_all)


class TestLoadsSource:
    """ConfigResolver without explicit source reads the config file."""

    def test_reads_config_file(self, tmp_path, monkeypatch, which_all):
        config_file = tmp_path / 'gfs-bootstrap.yaml'
        config_file.write_text(
            "project_name: filep\ncluster_name: filec\nzone: europe-west1-b\n"
        )
        monkeypatch.setenv('GFS_BOOTSTRAP_CONFIG', str(config_file))

        config = ConfigResolver(environ={}, which=which_all).resolve()

        assert config.project_name == 'filep'
        assert config.zone == 'europe-west1-b'

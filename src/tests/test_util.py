import logging
import zipfile

import pytest

from specluster.util.config import Configurable
from specluster.util.di import Context
from specluster.util.io import files
from specluster.util.io.files import zip_content
from specluster.util.log import get_logger
from specluster.util.progress import TqdmProgressFactory


class TestConfigurable:
    def test_defaults_and_overrides(self):
        c = Configurable({"b": 3, "c": {"d": "4"}}, defaults={"a": 1, "b": 2})
        assert c.get_config("a") == 1
        assert c.get_config("b") == 3
        assert c.get_config("c", "d", typed=int, allow_convert=True) == 4

    def test_missing_required(self):
        c = Configurable({"a": 1})
        with pytest.raises(KeyError):
            c.get_config("b")
        assert c.get_config("b", required=False) is None

    def test_type_mismatch(self):
        c = Configurable({"a": "x"})
        with pytest.raises(TypeError):
            c.get_config("a", typed=float)
        assert c.get_config("a", required=False, typed=float, allow_convert=True) is None

    def test_int_conversion_does_not_truncate(self):
        c = Configurable({"a": 2.7, "b": 3.0})
        with pytest.raises(ValueError):
            c.get_config("a", typed=int, allow_convert=True)
        assert c.get_config("b", typed=int, allow_convert=True) == 3

    def test_bool_conversion(self):
        c = Configurable({"a": "false", "b": "yes"})
        assert c.get_config("a", typed=bool, allow_convert=True) is False
        assert c.get_config("b", typed=bool, allow_convert=True) is True

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "configs.yml"
        path.write_text("a: 1\nb:\n  c: 2\n")
        c = Configurable(str(path))
        assert c.get_configs() == {"a": 1, "b": {"c": 2}}

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "configs.yaml"
        path.write_text("")
        assert Configurable(str(path)).get_configs() == {}


class TestContext:
    def test_injects_by_name(self):
        class Consumer:
            def __init__(self, logger, size=3):
                self.logger = logger
                self.size = size

        ctx = Context()
        logger = logging.getLogger("specluster.test.context")
        ctx.register("logger", logger)
        consumer = ctx.build(Consumer)
        assert consumer.logger is logger
        assert consumer.size == 3

    def test_singleton(self):
        ctx = Context()
        ctx.register("items", lambda: [])
        assert ctx.get("items") is ctx.get("items")

    def test_factory_kwargs(self):
        ctx = Context()
        ctx.register("pair", lambda first, second=0: (first, second), first=1)
        ctx.register("second", 5)
        assert ctx.get("pair") == (1, 5)

    def test_missing(self):
        ctx = Context()
        with pytest.raises(KeyError):
            ctx.get("logger")
        with pytest.raises(KeyError):
            ctx.build(lambda logger: logger)

    def test_extra_args_need_callable(self):
        with pytest.raises(ValueError):
            Context().register("value", 1, 2)


def test_get_logger_handlers(tmp_path):
    log_file = tmp_path / "run.log"
    logger = get_logger("specluster.test", file=str(log_file), level="debug")
    logger = get_logger("specluster.test", file=str(log_file), level="debug")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logger.info("hello")
    for h in logger.handlers:
        h.flush()
    assert "[INFO] hello" in log_file.read_text()

    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)


def test_progress_factory():
    progress = TqdmProgressFactory(disable=True)(range(3), desc="Reading")
    assert list(progress) == [0, 1, 2]


def test_zip_content_closes_archive(tmp_path, monkeypatch):
    archive = tmp_path / "spectra.zip"
    with zipfile.ZipFile(archive, "w") as zip:
        zip.writestr("data/spectra.mgf", "BEGIN IONS\nEND IONS\n")

    opened = []

    class RecordingZipFile(zipfile.ZipFile):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            opened.append(self.fp)

    monkeypatch.setattr(files, "ZipFile", RecordingZipFile)

    member = zip_content(str(archive / "data" / "spectra.mgf"))
    assert member.read() == b"BEGIN IONS\nEND IONS\n"
    assert not opened[0].closed
    member.close()
    assert opened[0].closed


def test_zip_content_plain_file(tmp_path):
    path = tmp_path / "spectra.mgf"
    path.write_bytes(b"END IONS\n")
    with zip_content(str(path)) as f:
        assert f.read() == b"END IONS\n"

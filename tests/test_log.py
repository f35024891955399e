from blobstorage import log


class TestInitLogging:
    def test_only_first_call_configures(self, monkeypatch):
        calls = []
        monkeypatch.setattr(log, '_initialized', False)
        monkeypatch.setattr(log, 'init_logger', lambda level: calls.append(level))

        log.init_logging('DEBUG')
        log.init_logging('TRACE')
        log.init_logging()

        assert calls == [log.LogLevel.DEBUG]

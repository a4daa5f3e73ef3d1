"""
Tests for structured logging
"""

import json
import logging

from account_ledger.logging_config import JSONFormatter, get_logger, log_action, setup_logging


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []
    
    def emit(self, record):
        self.records.append(record)


class TestLogging:
    """Test JSON formatting and log_action fields"""
    
    def test_json_formatter_drops_empty_fields(self):
        record = logging.LogRecord("account_ledger.test", logging.INFO, __file__, 1,
                                   "hello", (), None)
        record.action = "greet"
        
        entry = json.loads(JSONFormatter().format(record))
        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert entry["action"] == "greet"
        assert "correlation_id" not in entry
    
    def test_log_action_attaches_fields(self):
        logger = get_logger("account_ledger.test_action")
        logger.setLevel(logging.DEBUG)
        handler = ListHandler()
        logger.addHandler(handler)
        try:
            log_action(logger, "info", "applied", action="apply_transaction",
                       resource="account:1", correlation_id="abc",
                       extra={"value": 10})
        finally:
            logger.removeHandler(handler)
        
        record = handler.records[0]
        assert record.action == "apply_transaction"
        assert record.resource == "account:1"
        assert record.correlation_id == "abc"
        assert record.extra == {"value": 10}
    
    def test_log_action_respects_level(self):
        logger = get_logger("account_ledger.test_level")
        logger.setLevel(logging.WARNING)
        handler = ListHandler()
        logger.addHandler(handler)
        try:
            log_action(logger, "info", "quiet")
        finally:
            logger.removeHandler(handler)
        
        assert handler.records == []
    
    def test_setup_logging_replaces_handlers(self):
        logger = setup_logging("DEBUG", "text", logger_name="account_ledger.test_setup")
        logger = setup_logging("INFO", "json", logger_name="account_ledger.test_setup")
        
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JSONFormatter)
        assert logger.level == logging.INFO
        assert logger.propagate is False

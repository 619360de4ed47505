import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from rocketchat_rest.config.settings import settings


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("rocketchat_rest")
    logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)
    if not settings.log_dir:
        logger.addHandler(logging.NullHandler())
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "rocketchat.log", encoding="utf-8")
    fh.setLevel(logging.DEBUG)

    class JsonFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            msg = record.getMessage()
            extra = getattr(record, "extra", None)
            if settings.log_redact_content:
                msg = (msg or "")[:64]
                # 请求体里可能有消息正文或密码
                if isinstance(extra, dict) and "body" in extra:
                    extra = {**extra, "body": "<redacted>"}
            payload = {
                "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
                "level": record.levelname,
                "name": record.name,
                "msg": msg,
            }
            if isinstance(extra, dict):
                payload.update(extra)
            return json.dumps(payload, ensure_ascii=False, default=str)

    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()

"""telemlog command line.

  telemlog classify logs.jsonl           # one output envelope per input line
  cat logs.jsonl | telemlog classify
  telemlog run --config config/telemlog.yaml
"""
import argparse
import json
import logging
import sys
import time
from typing import List, Optional

from telemlog.config.loader import TelemlogConfig, default_config, load_config
from telemlog.core.bridge import Bridge
from telemlog.routers.mqtt_router import MQTTRouter


def _setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def cmd_classify(args, cfg: TelemlogConfig):
    def write(envelope):
        sys.stdout.write(json.dumps(envelope, ensure_ascii=False) + "\n")

    bridge = Bridge(write, workers=1, alarm_flags=cfg.alarm_table())
    src = open(args.file, "rb") if args.file else sys.stdin.buffer
    count = 0
    try:
        for line in src:
            line = line.rstrip(b"\r\n")
            if not line.strip():
                continue
            bridge.process(line)
            count += 1
    finally:
        if args.file:
            src.close()
    logging.info(f"[cli] classified {count} message(s)")


def cmd_run(args, cfg: TelemlogConfig):
    mqtt_cfg = cfg.mqtt.model_dump()
    router = MQTTRouter("mqtt", mqtt_cfg)
    bridge = Bridge(router.publish_envelope, workers=cfg.workers,
                    queue_size=cfg.queue_size, alarm_flags=cfg.alarm_table())
    router.on_message = bridge.submit

    bridge.start()
    router.start()
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logging.info("[cli] interrupted; shutting down")
    finally:
        router.stop()
        bridge.stop()


def make_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("telemlog", description="Vehicle telemetry log normalizer")
    p.add_argument("--config", "-c", help="Path to YAML config")
    p.add_argument("--log-level", help="Override log level (DEBUG, INFO, ...)")
    sub = p.add_subparsers(dest="cmd")

    pc = sub.add_parser("classify", help="Classify newline-delimited envelopes from a file or stdin")
    pc.add_argument("file", nargs="?", help="input file (default: stdin)")
    pc.set_defaults(func=cmd_classify)

    pr = sub.add_parser("run", help="Consume raw envelopes from MQTT and publish normalized output")
    pr.set_defaults(func=cmd_run)

    return p


def main(argv: Optional[List[str]] = None):
    parser = make_parser()
    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    cfg = load_config(args.config) if args.config else default_config()
    _setup_logging(args.log_level or cfg.log_level)
    args.func(args, cfg)
    return 0


if __name__ == "__main__":
    sys.exit(main())

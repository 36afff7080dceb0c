import json
import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import paho.mqtt.client as mqtt

from telemlog.core.constants import INPUT_TOPIC, OUTPUT_TOPIC, TOPIC_VERSION


def create_mqtt_client(client_id: str):
    return mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=client_id)


class MQTTRouter:
    """Source of raw log envelopes and sink for output envelopes over MQTT.

    Each inbound MQTT message is handed to `on_message` (the bridge's submit);
    `publish_envelope` writes one envelope to `output_topic` keyed by its type.
    """

    def __init__(self, name: str, cfg: dict, on_message: Optional[Callable[[Any], Any]] = None):
        self.name = name
        self.cfg = cfg
        self.on_message = on_message
        self.root = cfg.get("topic_prefix", TOPIC_VERSION)
        self.input_topic = cfg.get("input_topic", INPUT_TOPIC).format(root=self.root)
        self.output_topic = cfg.get("output_topic", OUTPUT_TOPIC)
        self.qos = int(cfg.get("qos", 0))
        self.client = create_mqtt_client(cfg.get("client_id", "telemlog"))
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect
        self.client.on_message = self._on_message
        self._lock = threading.Lock()
        self._run = False
        self._connected = False
        self._retry_backoff = 1.0
        self._threads = []

    def start(self):
        self._run = True
        t = threading.Thread(target=self._connect_loop, daemon=False)
        t.start()
        self._threads.append(t)

    def stop(self):
        self._run = False
        try:
            self.client.disconnect()
            self.client.loop_stop()
        except Exception as e:
            logging.debug(f"[mqtt:{self.name}] stop: {e}")
        self._connected = False
        for thr in self._threads:
            thr.join(timeout=2.0)
        self._threads = []

    def _connect_loop(self):
        host = self.cfg.get("host", "localhost")
        port = int(self.cfg.get("port", 1883))
        while self._run:
            if self._connected:
                time.sleep(1.0)
                continue
            try:
                logging.info(f"[mqtt:{self.name}] attempting connect_async {host}:{port}")
                if self.cfg.get("username"):
                    self.client.username_pw_set(self.cfg.get("username"), self.cfg.get("password"))
                self.client.connect_async(host, port, int(self.cfg.get("keepalive", 60)))
                self.client.loop_start()
                wait_for = 5.0
                start = time.time()
                while self._run and not self._connected and (time.time() - start) < wait_for:
                    time.sleep(0.1)
                if not self._connected:
                    logging.warning(f"[mqtt:{self.name}] connect not confirmed within {wait_for}s; "
                                    f"retry in {self._retry_backoff:.1f}s")
                    self.client.loop_stop()
                    time.sleep(self._retry_backoff)
            except Exception as e:
                logging.warning(f"[mqtt:{self.name}] connect error: {e}; retry in {self._retry_backoff:.1f}s")
                time.sleep(self._retry_backoff)

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        if reason_code == 0:
            logging.info(f"[mqtt:{self.name}] connected; subscribing {self.input_topic}")
            self._connected = True
            # resubscribe on every connect
            client.subscribe(self.input_topic, qos=self.qos)
        else:
            logging.warning(f"[mqtt:{self.name}] on_connect reason_code={reason_code}")

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties=None):
        self._connected = False
        if not self._run:
            return
        if reason_code != 0:
            logging.warning(f"[mqtt:{self.name}] unexpected disconnect reason_code={reason_code}; will retry")
        else:
            logging.info(f"[mqtt:{self.name}] clean disconnect")
        # the connect loop restarts the network loop
        client.loop_stop()

    def _on_message(self, _client, _userdata, msg):
        if self.on_message is None:
            logging.debug(f"[mqtt:{self.name}] no handler; drop message on {msg.topic}")
            return
        self.on_message(msg.payload)

    def topic_for(self, envelope: Dict[str, Any]) -> str:
        kind = str(envelope.get("type", "unknown")).lower()
        return self.output_topic.format(root=self.root, kind=kind)

    def publish_envelope(self, envelope: Dict[str, Any]):
        topic = self.topic_for(envelope)
        if not self._connected:
            logging.warning(f"[mqtt:{self.name}] drop publish (not connected) topic={topic}")
            return
        data = json.dumps(envelope, separators=(",", ":"), ensure_ascii=False)
        with self._lock:
            self.client.publish(topic, data, qos=self.qos)

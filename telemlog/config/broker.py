import os

from telemlog.core.constants import INPUT_TOPIC, OUTPUT_TOPIC, TOPIC_VERSION


def load_mqtt_defaults() -> dict:
    """Default MQTT settings, with TELEMLOG_* environment overrides.
    Returns dict with host, port, topic_prefix, qos, input_topic, output_topic.
    """
    host = os.getenv('TELEMLOG_MQTT_HOST', 'localhost')
    port = 1883
    try:
        port = int(os.getenv('TELEMLOG_MQTT_PORT', port))
    except ValueError:
        pass
    topic_prefix = os.getenv('TELEMLOG_TOPIC_PREFIX', TOPIC_VERSION)

    return {
        'host': host,
        'port': port,
        'topic_prefix': topic_prefix,
        'qos': 0,
        'input_topic': INPUT_TOPIC,
        'output_topic': OUTPUT_TOPIC,
    }

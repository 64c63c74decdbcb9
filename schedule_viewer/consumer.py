import json
import logging
import pika
import time
from typing import Dict, Any, Optional

from config.settings import get_grid_config, get_rabbitmq_config, get_schedule_api_config
from schedule_viewer.services.schedule_client import ScheduleClient, ScheduleFetchError
from schedule_viewer.services.schedule_viewer import ScheduleViewer
from schedule_viewer.utils.utils import (
    entry_to_dict,
    layout_to_dict,
    parse_groups,
    parse_schedule_view,
    teachers_to_list,
)

logger = logging.getLogger(__name__)

MAX_RECONNECT_ATTEMPTS = 10
INITIAL_RECONNECT_DELAY = 5
RECONNECT_BACKOFF = 1.5
MAX_RECONNECT_DELAY = 60
BLOCKED_CONNECTION_TIMEOUT = 300
SOCKET_TIMEOUT = 10


def build_client() -> ScheduleClient:
    api_config = get_schedule_api_config()
    return ScheduleClient(api_config["base_url"], timeout=api_config["timeout"])


def process_schedule_grid(data: Dict[str, Any], client: Optional[ScheduleClient] = None) -> Dict[str, Any]:
    """
    Processes a schedule grid request.

    Args:
        data: Request data

    Expected format:
    {
        "view": {"entries": [...], "totalAssignments": 12, ...},   # optional
        "groups": [{"id": "g1", "name": "1A"}, ...],                 # optional
        "scope": {"group_id": "g1"},          # used only when "view" is absent
        "group_id": "g1",
        "teacher_id": "t3"
    }

    Without an inline "view" the schedule is fetched from the backend,
    pre-filtered by "scope" when given.

    Returns:
        Dictionary with the filtered entries, teacher options, grid and list
    """
    try:
        grid_config = get_grid_config()

        if "view" in data:
            view = parse_schedule_view(data.get("view") or {})
            groups = parse_groups(data.get("groups") or [])
        else:
            client = client or build_client()
            scope = data.get("scope") or {}
            view = client.fetch_schedule_view(
                group_id=scope.get("group_id"),
                teacher_id=scope.get("teacher_id"),
                room_name=scope.get("room_name"),
            )
            groups = client.fetch_groups()

        viewer = ScheduleViewer(client, days=grid_config["days"], hours=grid_config["hours"])
        viewer.set_view(view, groups)
        viewer.select_group(data.get("group_id"))
        viewer.select_teacher(data.get("teacher_id"))

        logger.info(f"Schedule grid built: {len(viewer.filtered_entries)} of {len(view.entries)} entries, "
                    f"{len(viewer.layout.skipped)} skipped")

        return {
            "status": "success",
            "message": "Schedule grid built successfully",
            "data": {
                "filters": {
                    "group_id": viewer.filters.selected_group_id,
                    "teacher_id": viewer.filters.selected_teacher_id,
                },
                "groups": [
                    {"id": g.id, "name": g.name, "preferredRoomName": g.preferred_room_name}
                    for g in viewer.store.groups
                ],
                "teachers": teachers_to_list(viewer.teachers),
                "entries": [entry_to_dict(e) for e in viewer.filtered_entries],
                "list": [entry_to_dict(e) for e in viewer.list_rows],
                "grid": layout_to_dict(viewer.layout),
                "statistics": {
                    "total_assignments": view.total_assignments,
                    "assigned_count": view.assigned_count,
                    "unassigned_count": view.unassigned_count,
                    "placed": len(viewer.layout.placed),
                    "skipped": len(viewer.layout.skipped),
                },
            },
        }

    except ScheduleFetchError as e:
        logger.error(f"Error fetching schedule: {e}")
        return {
            "status": "error",
            "message": f"Error fetching schedule: {e}"
        }

    except Exception as e:
        logger.error(f"Error building schedule grid: {e}", exc_info=True)
        return {
            "status": "error",
            "message": f"Error building schedule grid: {str(e)}"
        }


def send_reply(ch, properties, result: Dict[str, Any]):
    if properties.reply_to:
        ch.basic_publish(
            exchange="",
            routing_key=properties.reply_to,
            properties=pika.BasicProperties(correlation_id=properties.correlation_id),
            body=json.dumps(result),
        )


def callback(ch, method, properties, body):
    """Message callback - answers the request and acknowledges it"""
    correlation_id = properties.correlation_id

    try:
        logger.info(f"Received message: {correlation_id}")
        message = json.loads(body)
        command = message.get("pattern")

        if command == "test_connection":
            result = {"status": "success", "message": "Connection established"}
            send_reply(ch, properties, result)

        elif command == "schedule_grid":
            logger.info("Processing schedule_grid request")
            result = process_schedule_grid(message.get("data") or {})
            send_reply(ch, properties, result)
            logger.info(f"Response sent for correlation_id: {correlation_id}")

        else:
            result = {"status": "error", "message": f"Unknown command: {command}"}
            send_reply(ch, properties, result)

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in message: {e}")

    except Exception as e:
        logger.error(f"Unexpected error in callback: {e}", exc_info=True)

    finally:
        try:
            ch.basic_ack(delivery_tag=method.delivery_tag)
        except Exception as e:
            logger.warning(f"Error acknowledging message: {e}")


def create_connection_and_channel(rabbitmq_config):
    """Opens a blocking connection and declares the durable request queue"""
    credentials = pika.PlainCredentials(
        username=rabbitmq_config["username"], password=rabbitmq_config["password"]
    )
    connection = pika.BlockingConnection(pika.ConnectionParameters(
        host=rabbitmq_config["host"],
        port=rabbitmq_config["port"],
        virtual_host=rabbitmq_config["vhost"],
        credentials=credentials,
        heartbeat=rabbitmq_config["heartbeat"],
        blocked_connection_timeout=BLOCKED_CONNECTION_TIMEOUT,
        socket_timeout=SOCKET_TIMEOUT,
        connection_attempts=rabbitmq_config["connection_attempts"],
        retry_delay=rabbitmq_config["retry_delay"],
    ))

    channel = connection.channel()
    queue_name = rabbitmq_config["queue_name"]
    channel.queue_declare(queue=queue_name, durable=True)
    # One unacknowledged request per consumer
    channel.basic_qos(prefetch_count=1)

    return connection, channel, queue_name


def close_quietly(channel, connection):
    """Stops consuming and closes whatever is still open after a session ends"""
    if channel is not None and not channel.is_closed:
        try:
            channel.stop_consuming()
            channel.close()
        except Exception as e:
            logger.warning(f"Error closing channel: {e}")

    if connection is not None and not connection.is_closed:
        try:
            connection.close()
        except Exception as e:
            logger.warning(f"Error closing connection: {e}")


def start_consumer():
    """
    Serves schedule grid requests until interrupted.

    A lost or refused connection is retried after a growing delay. The
    failure count and the delay start over once a connection succeeds, so
    only MAX_RECONNECT_ATTEMPTS failures in a row stop the consumer.
    """
    rabbitmq_config = get_rabbitmq_config()
    failures = 0
    delay = INITIAL_RECONNECT_DELAY

    while failures < MAX_RECONNECT_ATTEMPTS:
        connection = channel = None
        try:
            connection, channel, queue_name = create_connection_and_channel(rabbitmq_config)
            failures = 0
            delay = INITIAL_RECONNECT_DELAY

            channel.basic_consume(queue=queue_name, on_message_callback=callback)
            logger.info(f"Consumer started, listening on queue: {queue_name}")
            channel.start_consuming()

        except KeyboardInterrupt:
            logger.info("Shutdown signal received, stopping consumer...")
            return

        except pika.exceptions.AMQPConnectionError as e:
            # StreamLostError included
            failures += 1
            logger.error(f"AMQP connection error: {e} ({failures}/{MAX_RECONNECT_ATTEMPTS})")

        except Exception as e:
            failures += 1
            logger.error(f"Unexpected consumer error: {e} ({failures}/{MAX_RECONNECT_ATTEMPTS})",
                         exc_info=True)

        finally:
            close_quietly(channel, connection)

        if failures < MAX_RECONNECT_ATTEMPTS:
            logger.info(f"Reconnecting in {delay} seconds...")
            time.sleep(delay)
            delay = min(delay * RECONNECT_BACKOFF, MAX_RECONNECT_DELAY)

    logger.error(f"Giving up after {MAX_RECONNECT_ATTEMPTS} failed connection attempts")

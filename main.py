#!/usr/bin/env python3
import logging
import sys
from dotenv import load_dotenv

from config.settings import get_app_config, get_grid_config, get_schedule_api_config


def show_schedule(args):
    """Fetches the schedule from the backend and prints it: show [group_id [teacher_id]]"""
    from schedule_viewer.services.schedule_client import ScheduleClient
    from schedule_viewer.services.schedule_viewer import ScheduleViewer
    from schedule_viewer.utils.utils import show_timetable

    api_config = get_schedule_api_config()
    grid_config = get_grid_config()
    viewer = ScheduleViewer(
        ScheduleClient(api_config["base_url"], timeout=api_config["timeout"]),
        days=grid_config["days"],
        hours=grid_config["hours"],
    )

    error = viewer.refresh()
    if error:
        print(error)
    if len(args) > 0:
        viewer.select_group(args[0])
    if len(args) > 1:
        viewer.select_teacher(args[1])

    show_timetable(
        viewer.store.view,
        viewer.layout,
        viewer.list_rows,
        groups=viewer.store.groups,
        selected_group_id=viewer.filters.selected_group_id,
        group_name=viewer.selected_group_name,
        teacher_name=viewer.selected_teacher_name,
    )


if __name__ == "__main__":
    # Load environment variables
    load_dotenv()

    app_config = get_app_config()
    logging.basicConfig(
        level=logging.DEBUG if app_config["debug"] else app_config["log_level"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        if len(sys.argv) > 1 and sys.argv[1] == "show":
            show_schedule(sys.argv[2:])
        else:
            from schedule_viewer.consumer import start_consumer

            logger.info("Starting schedule grid consumer")
            start_consumer()
    except KeyboardInterrupt:
        logger.info("Consumer stopped by user")
    except Exception as e:
        logger.error(f"An error occurred: {e}", exc_info=True)

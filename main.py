#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
EduCenter - Academic Affairs desktop client
Main entry point: opens one of the wizards.

Usage:
    python main.py transfer            # student self-service transfer
    python main.py on-behalf           # transfer on behalf of a student
    python main.py import <classId>    # roster import into a class
"""

import sys

from PyQt5.QtWidgets import QApplication
from PyQt5.QtCore import Qt

from app.config import Config
from services.academic_api_service import AcademicApiService
from services.api_client import EduCenterApiClient
from services.query_cache import QueryCache
from services.request_runner import ThreadedRequestRunner
from services.translation_manager import set_language
from ui.error_handler import ErrorHandler
from utils.logger import setup_logger

USAGE = "usage: main.py transfer | on-behalf | import <classId>"


def build_wizard(args, api, runner):
    """Create the dialog named on the command line."""
    command = args[0] if args else "transfer"

    if command == "transfer":
        from ui.wizards.transfer.transfer_controller import TransferController
        from ui.wizards.transfer.transfer_wizard import TransferWizard
        return TransferWizard(TransferController(api, runner)), None

    if command == "on-behalf":
        from ui.wizards.transfer.transfer_controller import OnBehalfTransferController
        from ui.wizards.transfer.transfer_wizard import OnBehalfTransferWizard
        return OnBehalfTransferWizard(OnBehalfTransferController(api, runner)), None

    if command == "import" and len(args) > 1 and args[1].isdigit():
        from ui.wizards.enrollment_import.import_controller import EnrollmentImportController
        from ui.wizards.enrollment_import.import_wizard import EnrollmentImportWizard
        return EnrollmentImportWizard(EnrollmentImportController(api, runner)), int(args[1])

    raise ValueError(USAGE)


def main():
    """Main application entry point."""

    # Set Qt attributes BEFORE creating QApplication
    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    # Initialize logging
    logger = setup_logger()

    app = QApplication(sys.argv)
    app.setApplicationName(Config.APP_NAME)
    app.setOrganizationName(Config.ORGANIZATION)

    logger.info("=" * 80)
    logger.info(f"Starting {Config.APP_TITLE} {Config.VERSION}")
    logger.info("=" * 80)

    set_language(Config.UI_LANGUAGE)

    runner = ThreadedRequestRunner()
    cache = QueryCache(runner)
    api = AcademicApiService(EduCenterApiClient(), cache)

    try:
        wizard, class_id = build_wizard(sys.argv[1:], api, runner)
    except ValueError as e:
        print(e)
        sys.exit(2)

    wizard.navigate_requested.connect(
        lambda destination: logger.info(f"Navigation requested: {destination}")
    )
    try:
        if class_id is not None:
            wizard.start_for_class(class_id)
        else:
            wizard.start()
    except Exception as e:
        ErrorHandler.handle(e, wizard, context="startup")
        runner.wait_all()
        sys.exit(1)
    result = wizard.exec_()

    runner.wait_all()
    logger.info(f"Wizard closed with result: {result}")
    sys.exit(0)


if __name__ == "__main__":
    main()

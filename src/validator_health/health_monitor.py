import logging
from datetime import datetime
from enum import Enum
from typing import Callable

from .chain_state_reader import ChainStateReader
from .config import MonitorConfig
from .errors import DeliveryError, HealthCheckError
from .health_evaluator import HealthEvaluator
from .models import ChainSnapshot, HealthVerdict
from .reporter import Reporter, format_status_message
from .utils.rpc_client import RpcClient

# Get logger for this module
logger = logging.getLogger(__name__)

EXIT_SUCCESS: int = 0
EXIT_FAILURE: int = 1


class MonitorState(Enum):
    """Stages of a single monitoring run."""

    START = "start"
    FETCHING_LATEST = "fetching_latest"
    FETCHING_FINALIZED = "fetching_finalized"
    EVALUATING = "evaluating"
    REPORTING = "reporting"
    DONE = "done"


class HealthMonitor:
    """
    Runs one poll-evaluate-report cycle against a validator node.

    Reads the latest and finalized block heights, judges the lag, pings the
    monitoring service and turns the outcome into a process exit code. Any
    error while reading chain state ends the run immediately as a failure.
    """

    def __init__(
        self,
        config: MonitorConfig,
        reader: ChainStateReader | None = None,
        reporter: Reporter | None = None,
        clock: Callable[[], datetime] | None = None
    ) -> None:
        """
        Initialize the monitor.

        :param config: Monitor configuration
        :param reader: Chain state reader (built from config if omitted)
        :param reporter: Ping reporter (built from config if omitted)
        :param clock: Source of report timestamps (current UTC time if omitted)
        """
        self.config = config
        self.reader = reader or ChainStateReader(RpcClient(config.rpc_url, config.timeout))
        self.reporter = reporter or Reporter(config.ping_url, config.node_id, config.timeout)
        self.evaluator = HealthEvaluator(config.max_allowed_gap)
        self.clock = clock

        self.state: MonitorState = MonitorState.START
        self.snapshot: ChainSnapshot | None = None
        self.verdict: HealthVerdict | None = None
        self.status_message: str | None = None
        self.exit_code: int | None = None

    def _finish(self, exit_code: int) -> int:
        self.state = MonitorState.DONE
        self.exit_code = exit_code
        return exit_code

    async def _read_chain_state(self) -> ChainSnapshot:
        self.state = MonitorState.FETCHING_LATEST
        logger.info("Fetching latest block...")
        latest = await self.reader.get_latest_block()

        self.state = MonitorState.FETCHING_FINALIZED
        logger.info("Fetching finalized block...")
        finalized = await self.reader.get_finalized_block()

        return ChainSnapshot(latest_block=latest, finalized_block=finalized)

    async def _report(self, verdict: HealthVerdict, message: str) -> int:
        self.state = MonitorState.REPORTING

        if verdict.is_healthy:
            try:
                await self.reporter.report_success(message)
            except DeliveryError as e:
                # The missing ping looks like a dead node to the monitor, so fail loudly
                logger.error(f"Failed to send success ping: {e}")
                print(f"⚠️ Node is healthy but the success ping was not delivered\n{message}")
                return EXIT_FAILURE

            logger.info("✅ Health check passed - ping sent successfully")
            print(f"✅ Node is healthy\n{message}")
            return EXIT_SUCCESS

        try:
            await self.reporter.report_failure(message)
            logger.warning("❌ Health check failed - failure ping sent")
        except DeliveryError as e:
            logger.error(f"Failed to send failure ping: {e}")

        print(f"❌ Node lag too high!\n{message}")
        return EXIT_FAILURE

    async def run(self) -> int:
        """
        Execute one monitoring cycle.

        :return: Process exit code, 0 when healthy and reported, 1 otherwise
        """
        logger.info(f"Starting node monitoring for {self.config.node_id}")
        self.state = MonitorState.START

        try:
            self.snapshot = await self._read_chain_state()
        except HealthCheckError as e:
            logger.error(f"{type(e).__name__}: {e}")
            return self._finish(EXIT_FAILURE)

        self.state = MonitorState.EVALUATING
        self.verdict = self.evaluator.evaluate(self.snapshot)
        logger.info(f"{self.snapshot} -> {self.verdict}")

        timestamp = self.clock() if self.clock else None
        self.status_message = format_status_message(
            self.config.node_id, self.snapshot, self.verdict, timestamp
        )

        return self._finish(await self._report(self.verdict, self.status_message))

"""Long-polling loop feeding Telegram updates into the state machine."""

import asyncio
import logging
from typing import Optional

from reads_bot.adapters.telegram import IncomingUpdate, TelegramClient, parse_update
from reads_bot.conversation import ConversationStateMachine
from reads_bot.core import Reply, TransportError

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "sorry, something went wrong - try again or start over with /new"


class PollingRunner:
    """Fetch updates and hand them to per-chat workers.

    Each chat with pending updates has one worker task draining its queue, so
    a chat's events are handled strictly in order while other chats, and the
    polling loop itself, keep going. A worker exits once its queue is empty.
    """

    def __init__(
        self,
        client: TelegramClient,
        machine: ConversationStateMachine,
        poll_timeout: int = 30,
        error_backoff: float = 5.0,
    ) -> None:
        self.client = client
        self.machine = machine
        self.poll_timeout = poll_timeout
        self.error_backoff = error_backoff
        self.offset: Optional[int] = None
        self.queues: dict[int, asyncio.Queue] = {}
        self.workers: dict[int, asyncio.Task] = {}

    async def run(self) -> None:
        """Poll forever (until cancelled)."""
        await self.client.delete_webhook()
        logger.info("Polling for updates")

        try:
            while True:
                try:
                    updates = await self.client.get_updates(self.offset, self.poll_timeout)
                except TransportError as e:
                    logger.warning(f"Polling failed, retrying in {self.error_backoff:.0f}s: {e}")
                    await asyncio.sleep(self.error_backoff)
                    continue

                self.dispatch(updates)
        finally:
            await self.shutdown()

    def dispatch(self, updates: list[dict]) -> list[asyncio.Queue]:
        """Queue a batch of raw updates per chat and advance the offset.

        Returns:
            The queues that received updates.
        """
        touched: dict[int, asyncio.Queue] = {}

        for raw in updates:
            update_id = raw.get("update_id")
            if update_id is not None:
                self.offset = max(self.offset or 0, update_id + 1)

            incoming = parse_update(raw)
            if incoming is None:
                logger.debug(f"Ignoring update {update_id}")
                continue

            chat_id = incoming.chat_id
            queue = self.queues.get(chat_id)
            if queue is None:
                queue = self.queues[chat_id] = asyncio.Queue()
            queue.put_nowait(incoming)
            touched[chat_id] = queue

            if chat_id not in self.workers:
                task = asyncio.create_task(self._drain(chat_id, queue))
                task.add_done_callback(self._on_worker_done)
                self.workers[chat_id] = task

        return list(touched.values())

    async def process_updates(self, updates: list[dict]) -> None:
        """Dispatch a batch and wait until its chats have caught up."""
        for queue in self.dispatch(updates):
            await queue.join()

    async def shutdown(self) -> None:
        """Cancel workers still running and wait for them to finish."""
        workers = list(self.workers.values())
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

    async def _drain(self, chat_id: int, queue: asyncio.Queue) -> None:
        try:
            while not queue.empty():
                incoming = queue.get_nowait()
                try:
                    await self._process_one(incoming)
                except Exception as e:
                    logger.error(f"Worker error for chat {chat_id}: {e}", exc_info=True)
                finally:
                    queue.task_done()
        finally:
            # No await between the empty check and here, so dispatch cannot
            # queue an update this worker would miss
            self.workers.pop(chat_id, None)
            self.queues.pop(chat_id, None)

    def _on_worker_done(self, task: asyncio.Task) -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Chat worker crashed: {task.exception()!r}")

    async def _process_one(self, incoming: IncomingUpdate) -> None:
        if incoming.callback_query_id:
            try:
                await self.client.answer_callback_query(incoming.callback_query_id)
            except TransportError as e:
                logger.warning(f"Could not answer callback query: {e}")

        try:
            replies = await self.machine.handle_event(
                str(incoming.chat_id), incoming.event, incoming.username
            )
        except Exception as e:
            # Keep the bot alive; the session keeps whatever state it reached
            logger.error(f"Unhandled error for chat {incoming.chat_id}: {e}", exc_info=True)
            replies = [Reply(GENERIC_FAILURE)]

        try:
            await self.client.send_replies(incoming.chat_id, replies)
        except TransportError as e:
            logger.error(f"Failed to reply to chat {incoming.chat_id}: {e}")

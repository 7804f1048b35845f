import time

from xmixer.support.mixins import CommonEqualityMixin


class PeriodicSchedule(CommonEqualityMixin):

    def __init__(self, period, last_run=None):
        """
        :param period: The period in seconds.
        :param last_run: the time the action last ran. When None, the action is due immediately.
        """
        self.last_run = last_run
        self.period = period

    def __call__(self, current_time=None, dry_run=False):
        """return the length of time until the action should run again.
            A result <= 0 means the action is due now, and the period restarts from current_time.
            :param dry_run: when True, the last run time is not updated
        """
        if current_time is None:
            current_time = time.monotonic()
        result = self._time_to_run(current_time)
        if not dry_run and result <= 0:
            self.last_run = current_time
        return result

    def _time_to_run(self, current_time):
        return 0 if self.last_run is None else self.period - (current_time - self.last_run)

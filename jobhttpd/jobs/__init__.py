"""Jobs, task runners, priority queues, worker pools and persistent job state."""
from enum import IntEnum, Enum


class Status(IntEnum):
  SUCCESS = 0
  ALREADY_REGISTERED = 1
  NAME_CLASH = 2
  NOT_COMPILED = 3
  DIVISION_BY_ZERO = 4
  UNREGISTERED_SYMBOL = 5
  SYNTAX_ERROR = 6
  NESTING_TOO_DEEP = 7


class ErrorPolicy(Enum):
  """How evaluation-time errors travel through the tree.

  RETAIN: every subtree is evaluated; a reported error stays on the channel.
  LAST_WRITE_WINS: every subtree is evaluated; an operator node that completes
    cleanly writes SUCCESS back, possibly hiding an error reported below it.
  SHORT_CIRCUIT: the walk stops at the first error and the result is zero.
  """
  RETAIN = 'retain'
  LAST_WRITE_WINS = 'last_write_wins'
  SHORT_CIRCUIT = 'short_circuit'


class EvaluationAborted(Exception):
  """Raised inside a SHORT_CIRCUIT walk to unwind to the container."""


class StatusChannel:
  """Mutable status shared by every node during one tree walk"""

  __slots__ = ('status', 'policy')

  def __init__(self, policy: ErrorPolicy = ErrorPolicy.RETAIN):
    self.status = Status.SUCCESS
    self.policy = policy

  def report(self, status: Status):
    self.status = status
    if self.policy is ErrorPolicy.SHORT_CIRCUIT and status is not Status.SUCCESS:
      raise EvaluationAborted(status)

  def complete(self):
    """Called by an operator node that finished without its own error."""
    if self.policy is ErrorPolicy.LAST_WRITE_WINS:
      self.status = Status.SUCCESS

"""
Tilemap Editor - Numeric Input Fields

Labeled text inputs bound to camera / tile geometry values. Text is parsed
when editing finishes; malformed text never reaches the model, the field
just reverts to the last valid value.
"""

import math
import logging

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QLabel, QLineEdit
from PyQt5.QtCore import pyqtSignal

from models.errors import InvalidInputError
from utils.logger import loggerRecover


def format_number(value):
	"""Render a number the way the inputs display it (1 -> '1', 1.5 -> '1.5')"""
	value = float(value)
	if value.is_integer():
		return str(int(value))
	return repr(value)


def parse_float(text):
	"""Parse a finite float from input text

	Raises:
		InvalidInputError: If the text is empty, non-numeric, NaN or infinite
	"""
	try:
		value = float(text.strip())
	except ValueError:
		raise InvalidInputError(f"Not a number: {text!r}") from None
	if not math.isfinite(value):
		raise InvalidInputError(f"Not a finite number: {text!r}")
	return value


def parse_tile_size(text):
	"""Parse a positive integer tile size ('32', '32.0' and '32.7' give 32)

	Raises:
		InvalidInputError: If the text is not numeric or the size is not positive
	"""
	try:
		value = int(text.strip())
	except ValueError:
		value = int(parse_float(text))
	if value <= 0:
		raise InvalidInputError(f"Tile size must be positive: {text!r}")
	return value


class NumberInput(QWidget):
	"""Label + line edit holding one numeric value"""
	
	valueChanged = pyqtSignal(float)  # Emitted for user edits only
	
	def __init__(self, label, value=0, parser=parse_float, parent=None):
		super().__init__(parent)
		self._logger = logging.getLogger('NumberInput')
		self.parser = parser
		self._value = value
		self._setup_ui(label)
	
	def _setup_ui(self, label):
		"""Setup the input UI"""
		layout = QHBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)
		layout.setSpacing(5)
		
		self.label = QLabel(f"{label}:")
		self.label.setStyleSheet("padding: 2px 5px; font-size: 11px;")
		layout.addWidget(self.label)
		
		self.line_edit = QLineEdit(format_number(self._value))
		self.line_edit.setFixedWidth(80)
		self.line_edit.editingFinished.connect(self._on_editing_finished)
		layout.addWidget(self.line_edit)
	
	def value(self):
		"""Last valid value"""
		return self._value
	
	def text(self):
		return self.line_edit.text()
	
	def set_value(self, value):
		"""Reflect a programmatic change (does not emit valueChanged)"""
		self._value = value
		self.line_edit.blockSignals(True)
		self.line_edit.setText(format_number(value))
		self.line_edit.blockSignals(False)
	
	def submit_text(self, text):
		"""Apply text as if the user typed it and finished editing"""
		self.line_edit.setText(text)
		self._on_editing_finished()
	
	def _on_editing_finished(self):
		"""Parse the text; revert on malformed input"""
		text = self.line_edit.text()
		try:
			value = self.parser(text)
		except InvalidInputError as e:
			loggerRecover(e, f"Rejected input for {self.label.text()}", self._logger)
			self.set_value(self._value)
			return
		self.set_value(value)
		self.valueChanged.emit(float(value))

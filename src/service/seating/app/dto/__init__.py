from src.service.seating.app.dto.selection_result import SelectionResult

__all__ = ['SelectionResult']

'''The visitor pattern over the generation model'''

from .model import ReactorInfo


class Visitor:
    '''Walks a reactor component by component.'''

    current_reactor: ReactorInfo

    def __init__(self):
        '''Initialize the visitor with no current reactor'''
        self.current_reactor = None

    def visit_reactor(self, node: ReactorInfo):
        '''Enter a reactor'''
        for elem in node.params:
            self.visit_param(elem)
        for elem in node.state_vars:
            self.visit_state_var(elem)
        for elem in node.ports:
            self.visit_port(elem)
        for elem in node.timers:
            self.visit_timer(elem)
        for elem in node.actions:
            self.visit_action(elem)
        for elem in node.reactions:
            self.visit_reaction(elem)
        for elem in node.children:
            self.visit_child(elem)
        for elem in node.connections:
            self.visit_connection(elem)

    def visit_param(self, node):
        '''Enter a constructor parameter'''

    def visit_state_var(self, node):
        '''Enter a state variable'''

    def visit_port(self, node):
        '''Enter a port'''

    def visit_timer(self, node):
        '''Enter a timer'''

    def visit_action(self, node):
        '''Enter an action'''

    def visit_reaction(self, node):
        '''Enter a reaction'''

    def visit_child(self, node):
        '''Enter a child instance'''

    def visit_connection(self, node):
        '''Enter a connection'''

"""Installation steps and cleanup stages run against a target root through a context."""
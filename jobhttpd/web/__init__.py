"""HTTP request parsing, responses, errors, routing, routes and the server loop."""